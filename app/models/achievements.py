from __future__ import annotations
from typing import TYPE_CHECKING, List, Optional
import uuid
from sqlalchemy import String, Text, UniqueConstraint, PrimaryKeyConstraint, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base

if TYPE_CHECKING:
    from app.models.user_achievements import UserAchievements

class Achievements(Base):
    """
    Хранимый каталог достижений. Условия получения описаны в коде
    (app/services/achievement_catalog.py) и сопоставляются со строками по name.
    """
    __tablename__ = "achievements"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="achievements_pkey"),
        UniqueConstraint("name", name="achievements_name_key"),
        {"comment": "Достижения"},
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"), comment="ID достижения"
    )
    name: Mapped[str] = mapped_column(String, nullable=False, comment="Название достижения (ключ сопоставления)")
    description: Mapped[Optional[str]] = mapped_column(Text, comment="Описание достижения")
    icon_name: Mapped[Optional[str]] = mapped_column(String(64), comment="Имя иконки")

    user_achievements: Mapped[List["UserAchievements"]] = relationship(
        "UserAchievements", back_populates="achievement"
    )
