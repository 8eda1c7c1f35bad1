# app/services/condition_facts_service.py
"""
Сбор фактов об активности пользователя для проверки достижений.

Все чтения одной оценки независимы и выполняются параллельно, каждое в
своей сессии (AsyncSession нельзя делить между конкурентными операциями).
Отсутствие профиля — не ошибка (счётчики = 0); любая другая ошибка чтения
прерывает сбор целиком через DataAccessError, частичный снимок не отдаётся.
"""
from __future__ import annotations

import asyncio
import logging
import uuid
from collections import Counter
from typing import Any, Awaitable, Callable, Iterable, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from app.repos.achievements_repo import AchievementsRepository
from app.repos.chapters_repo import ChaptersRepository
from app.repos.profiles_repo import ProfilesRepository
from app.repos.studies_repo import StudiesRepository
from app.repos.user_achievements_repo import UserAchievementsRepository
from app.repos.user_progress_repo import UserProgressRepository
from app.schemas.achievement_engine import (
    AggregatedFacts,
    ConditionSnapshot,
    StoredAchievement,
)
from app.utils.exceptions import DataAccessError

logger = logging.getLogger(__name__)


def derive_completed_studies(
    study_ids: Iterable[uuid.UUID],
    chapter_refs: Iterable[Tuple[uuid.UUID, uuid.UUID]],
    completed_pairs: Iterable[Tuple[uuid.UUID, Optional[uuid.UUID]]],
) -> frozenset[uuid.UUID]:
    """
    Исследования, в которых пользователь прошёл все главы.

    Args:
        study_ids: ID всех исследований.
        chapter_refs: пары (chapter_id, study_id) по всем главам.
        completed_pairs: пары (chapter_id, study_id) пройденных пользователем глав.

    Исследование без глав пройденным не считается: отсутствие в счётчике
    пройденных глав не трактуется как «0 из 0».
    """
    total_by_study = Counter(study_id for _, study_id in chapter_refs)
    completed_by_study = Counter(
        study_id for _, study_id in completed_pairs if study_id is not None
    )

    completed: set[uuid.UUID] = set()
    for study_id in study_ids:
        total = total_by_study.get(study_id, 0)
        done = completed_by_study.get(study_id)
        if total and done is not None and done == total:
            completed.add(study_id)
    return frozenset(completed)


class ConditionFactsService:
    """
    Сборщик фактов: превращает историю активности пользователя в ConditionSnapshot.
    """

    def __init__(
        self,
        session_factory: Optional[Callable[[], Any]] = None,
        *,
        user_achievements_repo: Optional[UserAchievementsRepository] = None,
        achievements_repo: Optional[AchievementsRepository] = None,
        user_progress_repo: Optional[UserProgressRepository] = None,
        studies_repo: Optional[StudiesRepository] = None,
        chapters_repo: Optional[ChaptersRepository] = None,
        profiles_repo: Optional[ProfilesRepository] = None,
    ) -> None:
        if session_factory is None:
            from app.db.session import async_session_factory
            session_factory = async_session_factory
        self._session_factory = session_factory
        self._user_achievements_repo = user_achievements_repo or UserAchievementsRepository()
        self._achievements_repo = achievements_repo or AchievementsRepository()
        self._user_progress_repo = user_progress_repo or UserProgressRepository()
        self._studies_repo = studies_repo or StudiesRepository()
        self._chapters_repo = chapters_repo or ChaptersRepository()
        self._profiles_repo = profiles_repo or ProfilesRepository()

    async def _read(
        self,
        what: str,
        reader: Callable[..., Awaitable[Any]],
        *args: Any,
    ) -> Any:
        """Одно чтение в отдельной сессии; ошибки хранилища -> DataAccessError."""
        try:
            async with self._session_factory() as db:
                return await reader(db, *args)
        except SQLAlchemyError as exc:
            logger.error("facts read failed: %s: %s", what, exc)
            raise DataAccessError(payload={"read": what}) from exc

    async def collect(self, user_id: uuid.UUID) -> AggregatedFacts:
        """
        Собрать факты по пользователю.

        Returns:
            AggregatedFacts: снимок условий, ID уже полученных достижений
            и хранимый каталог достижений.

        Raises:
            DataAccessError: если не удалось выполнить любое из чтений.
        """
        (
            unlocked_ids,
            stored_rows,
            completed_pairs,
            study_ids,
            chapter_refs,
            counters,
        ) = await asyncio.gather(
            self._read("user_achievements", self._user_achievements_repo.list_achievement_ids, user_id),
            self._read("achievements", self._achievements_repo.list_all),
            self._read("user_progress", self._user_progress_repo.list_completed_pairs, user_id),
            self._read("studies", self._studies_repo.list_ids),
            self._read("chapters", self._chapters_repo.list_study_refs),
            self._read("profiles", self._profiles_repo.get_counters, user_id),
        )

        if counters is None:
            logger.debug("no profile row for user_id=%s, counters default to 0", user_id)
            counters = {}

        snapshot = ConditionSnapshot(
            total_completed_chapters=len(completed_pairs),
            completed_studies=derive_completed_studies(study_ids, chapter_refs, completed_pairs),
            streak_count=counters.get("streak_count", 0),
            total_shares=counters.get("total_shares", 0),
            total_journal_entries=counters.get("total_journal_entries", 0),
        )
        stored = tuple(
            StoredAchievement(
                id=row.id,
                name=row.name,
                description=row.description,
                icon_name=row.icon_name,
            )
            for row in stored_rows
        )
        return AggregatedFacts(
            snapshot=snapshot,
            unlocked_ids=frozenset(unlocked_ids),
            stored_achievements=stored,
        )
