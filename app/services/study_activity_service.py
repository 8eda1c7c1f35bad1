# app/services/study_activity_service.py
"""
События учебной активности, после которых проверяются достижения:
прохождение главы и «поделиться» контентом.

Оценка достижений — побочный эффект: её ошибка не отменяет само действие.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from app.repos.chapters_repo import ChaptersRepository
from app.repos.profiles_repo import ProfilesRepository
from app.repos.user_progress_repo import UserProgressRepository
from app.schemas.achievement_engine import StoredAchievement
from app.services.achievement_engine_service import AchievementEngineService
from app.services.activity_log_service import ActivityLogService
from app.utils.exceptions import DataAccessError, DomainError

logger = logging.getLogger(__name__)


class StudyActivityService:
    """
    Прохождение глав и публикации контента.
    """

    def __init__(
        self,
        session_factory: Optional[Callable[[], Any]] = None,
        *,
        chapters_repo: Optional[ChaptersRepository] = None,
        user_progress_repo: Optional[UserProgressRepository] = None,
        profiles_repo: Optional[ProfilesRepository] = None,
        achievement_engine: Optional[AchievementEngineService] = None,
        activity_log: Optional[ActivityLogService] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        if session_factory is None:
            from app.db.session import async_session_factory
            session_factory = async_session_factory
        self._session_factory = session_factory
        self._chapters_repo = chapters_repo or ChaptersRepository()
        self._user_progress_repo = user_progress_repo or UserProgressRepository()
        self._profiles_repo = profiles_repo or ProfilesRepository()
        self._engine = achievement_engine or AchievementEngineService(session_factory)
        self._activity_log = activity_log or ActivityLogService(session_factory)
        self._clock = clock

    async def complete_chapter(
        self, user_id: uuid.UUID, chapter_id: uuid.UUID
    ) -> Tuple[StoredAchievement, ...]:
        """
        Отметить главу пройденной (идемпотентно) и проверить достижения.

        Returns:
            Впервые полученные достижения.

        Raises:
            DomainError(404): глава не найдена.
            DataAccessError: не удалось сохранить прогресс.
        """
        try:
            async with self._session_factory() as db:
                chapter = await self._chapters_repo.get(db, chapter_id)
                if chapter is None:
                    raise DomainError("Chapter not found", status_code=404)
                await self._user_progress_repo.mark_completed(
                    db, user_id, chapter_id, chapter.study_id, self._clock()
                )
        except SQLAlchemyError as exc:
            logger.error(
                "chapter completion failed: user_id=%s chapter_id=%s: %s", user_id, chapter_id, exc
            )
            raise DataAccessError() from exc

        logger.info("chapter completed: user_id=%s chapter_id=%s", user_id, chapter_id)
        evaluation = await self._engine.evaluate_best_effort(user_id)
        return evaluation.newly_unlocked

    async def record_share(
        self, user_id: uuid.UUID, description: str
    ) -> Tuple[int, Tuple[StoredAchievement, ...]]:
        """
        Учесть публикацию контента: счётчик профиля, журнал, достижения.

        Returns:
            (новое значение total_shares, впервые полученные достижения)

        Raises:
            DataAccessError: не удалось увеличить счётчик.
        """
        try:
            async with self._session_factory() as db:
                total_shares = await self._profiles_repo.increment_counter(
                    db, user_id, "total_shares"
                )
        except SQLAlchemyError as exc:
            logger.error("share counter update failed for user_id=%s: %s", user_id, exc)
            raise DataAccessError() from exc

        await self._activity_log.log_user_activity(
            user_id, "content_shared", f"Compartilhou conteúdo: \"{description[:50]}\""
        )
        evaluation = await self._engine.evaluate_best_effort(user_id)
        return total_shares, evaluation.newly_unlocked
