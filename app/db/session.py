# app/db/session.py
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker

from app.core.config import Settings

settings = Settings()

# Асинхронный движок
engine = create_async_engine(
    settings.database_url,
    echo=False,
    future=True,
)

# Фабрика сессий. Сервисы, которые читают параллельно (asyncio.gather),
# открывают через неё отдельную сессию на каждое чтение.
async_session_factory = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
)
