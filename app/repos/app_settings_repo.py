# app/repos/app_settings_repo.py

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.app_settings import AppSettings
from app.repos.base import BaseRepository


class AppSettingsRepository(BaseRepository[AppSettings]):
    """
    Репозиторий глобальных настроек (ключ-значение).
    """
    def __init__(self) -> None:
        super().__init__(AppSettings)

    async def get_value(self, db: AsyncSession, key: str) -> Optional[str]:
        """Значение настройки или None, если ключа нет."""
        obj = await self.get(db, key)
        return obj.value if obj is not None else None
