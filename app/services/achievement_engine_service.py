# app/services/achievement_engine_service.py
"""
Оценка достижений пользователя.

Сценарий одной оценки:
1) сбор фактов (ConditionFactsService, чтения параллельно);
2) сопоставление каталога из кода с таблицей achievements по name;
3) отбор ещё не полученных достижений, условие которых выполнено
   (строго в порядке каталога);
4) одна пакетная вставка в user_achievements; при ошибке вставки
   ничего не считается полученным, но снимок фактов возвращается.

Сервис ничего не обновляет и не удаляет: только одна вставка на оценку.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.repos.user_achievements_repo import UserAchievementsRepository
from app.schemas.achievement_engine import (
    AchievementDefinition,
    AchievementProgressItem,
    ConditionSnapshot,
    EvaluationResult,
    StoredAchievement,
)
from app.services.achievement_catalog import ACHIEVEMENT_DEFINITIONS
from app.services.condition_facts_service import ConditionFactsService
from app.utils.exceptions import DataAccessError

logger = logging.getLogger(__name__)


def select_new_achievements(
    definitions: Sequence[AchievementDefinition],
    stored: Iterable[StoredAchievement],
    unlocked_ids: FrozenSet[uuid.UUID],
    snapshot: ConditionSnapshot,
) -> List[StoredAchievement]:
    """
    Достижения, которые нужно выдать сейчас (в порядке каталога).

    Определения без строки в БД пропускаются; каждый пропуск пишется в лог (WARNING).
    """
    stored_by_name: Dict[str, StoredAchievement] = {row.name: row for row in stored}
    to_award: List[StoredAchievement] = []
    for definition in definitions:
        row = stored_by_name.get(definition.name)
        if row is None:
            logger.warning(
                "achievement %r is defined in code but missing from the achievements table, skipped",
                definition.name,
            )
            continue
        if row.id not in unlocked_ids and definition.predicate(snapshot):
            to_award.append(row)
    return to_award


def describe_achievements(
    definitions: Sequence[AchievementDefinition],
    stored: Iterable[StoredAchievement],
    unlocked_ids: FrozenSet[uuid.UUID],
    snapshot: ConditionSnapshot,
) -> List[AchievementProgressItem]:
    """Состояние и прогресс каждого достижения каталога (для экрана достижений)."""
    stored_by_name = {row.name: row for row in stored}
    items: List[AchievementProgressItem] = []
    for definition in definitions:
        row = stored_by_name.get(definition.name)
        if row is None:
            continue
        items.append(
            AchievementProgressItem(
                achievement=row,
                unlocked=row.id in unlocked_ids,
                progress=definition.progress(snapshot),
            )
        )
    return items


class AchievementEngineService:
    """
    Оценщик достижений поверх сборщика фактов и репозитория user_achievements.
    """

    def __init__(
        self,
        session_factory: Optional[Callable[[], Any]] = None,
        *,
        facts_service: Optional[ConditionFactsService] = None,
        user_achievements_repo: Optional[UserAchievementsRepository] = None,
        definitions: Sequence[AchievementDefinition] = ACHIEVEMENT_DEFINITIONS,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        if session_factory is None:
            from app.db.session import async_session_factory
            session_factory = async_session_factory
        self._session_factory = session_factory
        self._facts = facts_service or ConditionFactsService(session_factory)
        self._user_achievements_repo = user_achievements_repo or UserAchievementsRepository()
        self._definitions: Tuple[AchievementDefinition, ...] = tuple(definitions)
        self._clock = clock

    async def evaluate(self, user_id: uuid.UUID) -> EvaluationResult:
        """
        Проверить и выдать новые достижения.

        Returns:
            EvaluationResult: впервые полученные достижения (как запрошено к
            вставке, без перечитывания) и снимок фактов.

        Raises:
            DataAccessError: если не удалось собрать факты.
        """
        facts = await self._facts.collect(user_id)
        to_award = select_new_achievements(
            self._definitions, facts.stored_achievements, facts.unlocked_ids, facts.snapshot
        )
        if not to_award:
            return EvaluationResult(newly_unlocked=(), snapshot=facts.snapshot)

        unlocked_at = self._clock()
        try:
            async with self._session_factory() as db:
                await self._user_achievements_repo.insert_unlocks(
                    db, user_id, [row.id for row in to_award], unlocked_at
                )
        except IntegrityError as exc:
            # параллельная оценка уже записала эти достижения
            logger.info(
                "unlock insert conflict for user_id=%s (%s), nothing new awarded",
                user_id, exc.orig,
            )
            return EvaluationResult(newly_unlocked=(), snapshot=facts.snapshot)
        except SQLAlchemyError as exc:
            logger.error("unlock insert failed for user_id=%s: %s", user_id, exc)
            return EvaluationResult(newly_unlocked=(), snapshot=facts.snapshot)

        logger.info(
            "achievements unlocked: user_id=%s names=%s",
            user_id, [row.name for row in to_award],
        )
        return EvaluationResult(newly_unlocked=tuple(to_award), snapshot=facts.snapshot)

    async def evaluate_best_effort(self, user_id: uuid.UUID) -> EvaluationResult:
        """
        Оценка как побочный эффект действия пользователя (глава, дневник, «поделиться»).
        Ошибка данных логируется и не мешает основному действию.
        """
        try:
            return await self.evaluate(user_id)
        except DataAccessError as exc:
            logger.warning("achievement evaluation skipped for user_id=%s: %s", user_id, exc.detail)
            return EvaluationResult(newly_unlocked=(), snapshot=ConditionSnapshot())

    async def list_progress(self, user_id: uuid.UUID) -> List[AchievementProgressItem]:
        """
        Каталог с отметкой «получено» и прогрессом (только чтение, без выдачи).

        Raises:
            DataAccessError: если не удалось собрать факты.
        """
        facts = await self._facts.collect(user_id)
        return describe_achievements(
            self._definitions, facts.stored_achievements, facts.unlocked_ids, facts.snapshot
        )
