"""
Фейки хранилища для тестов сервисов: сессия-заглушка и in-memory хранилище
с репозиториями, повторяющими контракты app/repos/*.
"""
from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Callable, Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from app.schemas.achievement_engine import StoredAchievement
from app.services.achievement_catalog import ACHIEVEMENT_DEFINITIONS
from app.services.condition_facts_service import ConditionFactsService


class FakeSession:
    """
    Асинхронный контекст-менеджер вместо AsyncSession.
    Записи с commit=False копятся в pending и применяются в commit();
    незакоммиченное при выходе из контекста теряется, как при откате.
    """

    def __init__(self) -> None:
        self.pending: List[Callable[[], None]] = []
        self.commits = 0
        self.rollbacks = 0

    async def __aenter__(self) -> "FakeSession":
        return self

    async def __aexit__(self, *exc) -> bool:
        self.pending.clear()
        return False

    def stage(self, apply: Callable[[], None], commit: bool) -> None:
        if commit:
            apply()
        else:
            self.pending.append(apply)

    async def commit(self) -> None:
        for apply in self.pending:
            apply()
        self.pending.clear()
        self.commits += 1

    async def rollback(self) -> None:
        self.pending.clear()
        self.rollbacks += 1


class CountingSessionFactory:
    """Фабрика сессий, считающая открытые сессии."""

    def __init__(self) -> None:
        self.opened = 0

    def __call__(self) -> FakeSession:
        self.opened += 1
        return FakeSession()


def catalog_rows(skip: Tuple[str, ...] = ()) -> List[StoredAchievement]:
    """Строки таблицы achievements для всего каталога (кроме skip)."""
    return [
        StoredAchievement(id=uuid.uuid4(), name=d.name, description=d.description, icon_name=d.icon_name)
        for d in ACHIEVEMENT_DEFINITIONS
        if d.name not in skip
    ]


class InMemoryStore:
    """Минимальное хранилище: то, что читает сборщик фактов и пишет оценщик."""

    def __init__(
        self,
        achievements: Optional[List[StoredAchievement]] = None,
        studies: Optional[List[uuid.UUID]] = None,
        chapters: Optional[List[Tuple[uuid.UUID, uuid.UUID]]] = None,
        profiles: Optional[Dict[uuid.UUID, Dict[str, int]]] = None,
    ) -> None:
        self.achievements = achievements if achievements is not None else catalog_rows()
        self.studies = studies or []
        self.chapters = chapters or []
        self.profiles = profiles or {}
        self.completed: Dict[uuid.UUID, List[Tuple[uuid.UUID, Optional[uuid.UUID]]]] = {}
        self.unlocks: Dict[Tuple[uuid.UUID, uuid.UUID], datetime] = {}
        self.insert_calls = 0
        self.daily: Dict[Tuple[uuid.UUID, str, date], Optional[str]] = {}

    def by_name(self, name: str) -> StoredAchievement:
        return next(a for a in self.achievements if a.name == name)

    def complete_chapters(self, user_id: uuid.UUID, count: int, study_id: Optional[uuid.UUID] = None) -> None:
        pairs = self.completed.setdefault(user_id, [])
        for _ in range(count):
            pairs.append((uuid.uuid4(), study_id))

    def facts_service(self, session_factory=None) -> ConditionFactsService:
        return ConditionFactsService(
            session_factory or CountingSessionFactory(),
            user_achievements_repo=FakeUserAchievementsRepo(self),
            achievements_repo=FakeAchievementsRepo(self),
            user_progress_repo=FakeUserProgressRepo(self),
            studies_repo=FakeStudiesRepo(self),
            chapters_repo=FakeChaptersRepo(self),
            profiles_repo=FakeProfilesRepo(self),
        )


class FakeUserAchievementsRepo:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def list_achievement_ids(self, db, user_id):
        return [a for (u, a) in self.store.unlocks if u == user_id]

    async def insert_unlocks(self, db, user_id, achievement_ids, unlocked_at):
        keys = [(user_id, a) for a in achievement_ids]
        if any(k in self.store.unlocks for k in keys):
            # как PK (user_id, achievement_id): вся пачка отклоняется
            raise IntegrityError(
                "INSERT INTO user_achievements", {}, Exception("duplicate key value violates unique constraint")
            )
        for k in keys:
            self.store.unlocks[k] = unlocked_at
        self.store.insert_calls += 1
        return keys


class FakeAchievementsRepo:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def list_all(self, db):
        return list(self.store.achievements)


class FakeUserProgressRepo:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def list_completed_pairs(self, db, user_id):
        return list(self.store.completed.get(user_id, []))


class FakeStudiesRepo:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def list_ids(self, db):
        return list(self.store.studies)


class FakeChaptersRepo:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def list_study_refs(self, db):
        return list(self.store.chapters)


class FakeProfilesRepo:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def get_counters(self, db, user_id):
        counters = self.store.profiles.get(user_id)
        return dict(counters) if counters is not None else None

    async def increment_counter(self, db, user_id, field, commit=True):
        current = self.store.profiles.get(user_id, {}).get(field, 0)

        def apply():
            counters = self.store.profiles.setdefault(
                user_id, {"streak_count": 0, "total_shares": 0, "total_journal_entries": 0}
            )
            counters[field] += 1

        db.stage(apply, commit)
        return current + 1


class FakeDailyTasksProgressRepo:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def list_task_names(self, db, user_id, task_date):
        return [name for (u, name, d) in self.store.daily if u == user_id and d == task_date]

    async def upsert_entry(self, db, user_id, task_name, task_date, value, commit=True):
        key = (user_id, task_name, task_date)
        created = key not in self.store.daily

        def apply():
            self.store.daily[key] = value

        db.stage(apply, commit)
        return created
