# app/services/achievements_service.py

import logging
import uuid
from typing import Any, Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from app.repos.achievements_repo import AchievementsRepository
from app.services.achievement_catalog import ACHIEVEMENT_DEFINITIONS
from app.services.activity_log_service import ActivityLogService
from app.utils.exceptions import DataAccessError

logger = logging.getLogger(__name__)


class AchievementsService:
    """
    Синхронизация хранимого каталога achievements с каталогом в коде.
    Добавляет только недостающие строки; существующие не меняет и не удаляет.
    """
    def __init__(
        self,
        session_factory: Optional[Callable[[], Any]] = None,
        *,
        repo: Optional[AchievementsRepository] = None,
        activity_log: Optional[ActivityLogService] = None,
    ) -> None:
        if session_factory is None:
            from app.db.session import async_session_factory
            session_factory = async_session_factory
        self._session_factory = session_factory
        self.repo = repo or AchievementsRepository()
        self._activity_log = activity_log or ActivityLogService(session_factory)

    async def sync_catalog(self, admin_user_id: Optional[uuid.UUID] = None) -> List[str]:
        """
        Вставить недостающие достижения каталога.

        Returns:
            Имена добавленных достижений (пусто, если всё уже на месте).

        Raises:
            DataAccessError: ошибка записи в БД.
        """
        rows = [
            {
                "name": d.name,
                "description": d.description,
                "icon_name": d.icon_name,
            }
            for d in ACHIEVEMENT_DEFINITIONS
        ]
        try:
            async with self._session_factory() as db:
                inserted = await self.repo.insert_missing(db, rows)
        except SQLAlchemyError as exc:
            logger.error("achievement catalog sync failed: %s", exc)
            raise DataAccessError() from exc

        logger.info("achievement catalog sync: inserted=%s", inserted)
        if admin_user_id is not None:
            await self._activity_log.log_admin_activity(
                admin_user_id,
                "achievements_synced",
                f"Sincronizou o catálogo de conquistas ({len(inserted)} novas).",
            )
        return inserted
