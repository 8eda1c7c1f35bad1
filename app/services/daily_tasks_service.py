# app/services/daily_tasks_service.py
"""
Ежедневные задания пользователя: статус за день, прогресс «Пути дня»
и сохранение выполнения с последующей навигацией.

Первая за день запись в дневник (spiritual_journal) увеличивает profiles.total_journal_entries;
после сохранения любого задания достижения проверяются «по возможности»:
ошибка оценки не отменяет сохранение.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from app.repos.daily_tasks_progress_repo import DailyTasksProgressRepository
from app.repos.profiles_repo import ProfilesRepository
from app.schemas.achievement_engine import StoredAchievement
from app.schemas.daily_tasks import DailyProgress, TaskCompletionStatus, TaskNavigation
from app.services.achievement_engine_service import AchievementEngineService
from app.services.daily_tasks_sequence import (
    DAILY_TASK_SEQUENCE,
    TASK_COMPLETION_FIELDS,
    DailyTaskSequence,
)
from app.utils.exceptions import DataAccessError, DomainError

logger = logging.getLogger(__name__)

JOURNAL_TASK_NAME = "spiritual_journal"


@dataclass(frozen=True)
class DailyTaskCompletion:
    """Результат сохранения задания."""

    task_name: str
    task_date: date
    navigation: Optional[TaskNavigation]
    new_achievements: Tuple[StoredAchievement, ...]


class DailyTasksService:
    """
    Сервис ежедневных заданий поверх daily_tasks_progress.
    """

    def __init__(
        self,
        session_factory: Optional[Callable[[], Any]] = None,
        *,
        sequence: DailyTaskSequence = DAILY_TASK_SEQUENCE,
        progress_repo: Optional[DailyTasksProgressRepository] = None,
        profiles_repo: Optional[ProfilesRepository] = None,
        achievement_engine: Optional[AchievementEngineService] = None,
    ) -> None:
        if session_factory is None:
            from app.db.session import async_session_factory
            session_factory = async_session_factory
        self._session_factory = session_factory
        self.sequence = sequence
        self._progress_repo = progress_repo or DailyTasksProgressRepository()
        self._profiles_repo = profiles_repo or ProfilesRepository()
        self._engine = achievement_engine or AchievementEngineService(session_factory)

    async def get_status(self, user_id: uuid.UUID, task_date: date) -> TaskCompletionStatus:
        """
        Флаги выполнения за дату: задание выполнено, если за дату есть строка.

        Raises:
            DataAccessError: ошибка чтения.
        """
        try:
            async with self._session_factory() as db:
                names = await self._progress_repo.list_task_names(db, user_id, task_date)
        except SQLAlchemyError as exc:
            logger.error("daily tasks read failed for user_id=%s: %s", user_id, exc)
            raise DataAccessError() from exc

        flags = {
            TASK_COMPLETION_FIELDS[name]: True
            for name in names
            if name in TASK_COMPLETION_FIELDS
        }
        return TaskCompletionStatus(**flags)

    async def get_progress(
        self, user_id: uuid.UUID, task_date: date
    ) -> Tuple[TaskCompletionStatus, DailyProgress]:
        status = await self.get_status(user_id, task_date)
        return status, self.sequence.progress(status)

    async def complete_task(
        self,
        user_id: uuid.UUID,
        task_name: str,
        task_date: date,
        value: Optional[str] = None,
    ) -> DailyTaskCompletion:
        """
        Сохранить выполнение задания и вернуть навигацию «что дальше».

        Сохранять можно любое отслеживаемое задание (включая verse_of_the_day);
        навигация считается только для заданий «Пути дня», для остальных None.
        Запись задания и счётчик дневника коммитятся одной транзакцией.

        Raises:
            DomainError(404): задание не отслеживается.
            DataAccessError: не удалось сохранить выполнение.
        """
        in_sequence = self.sequence.contains(task_name)
        if not in_sequence and task_name not in TASK_COMPLETION_FIELDS:
            raise DomainError(f"Unknown daily task '{task_name}'", status_code=404)

        status = await self.get_status(user_id, task_date) if in_sequence else None
        try:
            async with self._session_factory() as db:
                try:
                    created = await self._progress_repo.upsert_entry(
                        db, user_id, task_name, task_date, value, commit=False
                    )
                    if created and task_name == JOURNAL_TASK_NAME:
                        await self._profiles_repo.increment_counter(
                            db, user_id, "total_journal_entries", commit=False
                        )
                    await db.commit()
                except SQLAlchemyError:
                    await db.rollback()
                    raise
        except SQLAlchemyError as exc:
            logger.error(
                "daily task save failed: user_id=%s task=%s: %s", user_id, task_name, exc
            )
            raise DataAccessError() from exc

        logger.info(
            "daily task saved: user_id=%s task=%s date=%s created=%s",
            user_id, task_name, task_date, created,
        )

        evaluation = await self._engine.evaluate_best_effort(user_id)

        navigation = None
        if in_sequence:
            completed_status = self.sequence.with_task_completed(status, task_name)
            navigation = self.sequence.navigation(task_name, completed_status)
        return DailyTaskCompletion(
            task_name=task_name,
            task_date=task_date,
            navigation=navigation,
            new_achievements=evaluation.newly_unlocked,
        )
