# app/db/base.py

from sqlalchemy.orm import DeclarativeBase

class Base(DeclarativeBase):
    pass

# --- ниже — импорты всех моделей, чтобы они сразу зарегистрировались в метаданных и в clsregistry
import app.models.profiles
import app.models.studies
import app.models.chapters
import app.models.user_progress
import app.models.achievements
import app.models.user_achievements
import app.models.daily_tasks_progress
import app.models.app_settings
import app.models.activity_logs
