"""
Тесты сервиса ежедневных заданий: статус за день, сохранение, счётчик
записей дневника, навигация после сохранения, оценка достижений.
"""
import asyncio
import uuid
from datetime import date
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from app.schemas.achievement_engine import ConditionSnapshot, EvaluationResult, StoredAchievement
from app.services.daily_tasks_service import DailyTasksService
from app.utils.exceptions import DataAccessError, DomainError
from fakes import CountingSessionFactory, FakeDailyTasksProgressRepo, FakeProfilesRepo, InMemoryStore

TODAY = date(2026, 10, 17)


def _service(store: InMemoryStore, engine=None) -> DailyTasksService:
    if engine is None:
        engine = AsyncMock()
        engine.evaluate_best_effort.return_value = EvaluationResult((), ConditionSnapshot())
    return DailyTasksService(
        CountingSessionFactory(),
        progress_repo=FakeDailyTasksProgressRepo(store),
        profiles_repo=FakeProfilesRepo(store),
        achievement_engine=engine,
    )


def test_status_reflects_saved_tasks_for_date():
    user_id = uuid.uuid4()
    store = InMemoryStore()
    store.daily[(user_id, "daily_study", TODAY)] = None
    store.daily[(user_id, "verse_of_the_day", TODAY)] = None
    store.daily[(user_id, "spiritual_journal", date(2026, 10, 16))] = "ontem"

    status, progress = asyncio.run(_service(store).get_progress(user_id, TODAY))

    assert status.is_daily_study_task_completed is True
    assert status.is_verse_of_the_day_task_completed is True
    assert status.is_journal_completed is False
    assert (progress.completed_count, progress.total) == (1, 5)


def test_complete_task_navigates_to_next_incomplete():
    user_id = uuid.uuid4()
    store = InMemoryStore()
    store.daily[(user_id, "daily_study", TODAY)] = None

    result = asyncio.run(_service(store).complete_task(user_id, "spiritual_journal", TODAY, "Obrigado"))

    assert store.daily[(user_id, "spiritual_journal", TODAY)] == "Obrigado"
    assert result.navigation.next_task_path == "/today/quick-reflection"
    assert result.navigation.is_first_task is True
    assert result.navigation.is_sequence_complete is False


def test_completing_last_task_finishes_path():
    user_id = uuid.uuid4()
    store = InMemoryStore()
    for name in ("spiritual_journal", "daily_study", "quick_reflection", "inspirational_quotes"):
        store.daily[(user_id, name, TODAY)] = None

    result = asyncio.run(_service(store).complete_task(user_id, "my_prayer", TODAY))

    assert result.navigation.next_task_path is None
    assert result.navigation.previous_task_path == "/today/inspirational-quote"
    assert result.navigation.is_sequence_complete is True


def test_journal_counter_increments_once_per_day():
    user_id = uuid.uuid4()
    store = InMemoryStore()
    service = _service(store)

    asyncio.run(service.complete_task(user_id, "spiritual_journal", TODAY, "primeira"))
    asyncio.run(service.complete_task(user_id, "spiritual_journal", TODAY, "editada"))
    asyncio.run(service.complete_task(user_id, "daily_study", TODAY))

    assert store.profiles[user_id]["total_journal_entries"] == 1
    assert store.daily[(user_id, "spiritual_journal", TODAY)] == "editada"


def test_completion_returns_new_achievements():
    user_id = uuid.uuid4()
    store = InMemoryStore()
    badge = StoredAchievement(id=uuid.uuid4(), name="Reflexão Profunda")
    engine = AsyncMock()
    engine.evaluate_best_effort.return_value = EvaluationResult((badge,), ConditionSnapshot(total_journal_entries=10))

    result = asyncio.run(_service(store, engine).complete_task(user_id, "spiritual_journal", TODAY))

    assert result.new_achievements == (badge,)
    engine.evaluate_best_effort.assert_awaited_once_with(user_id)


def test_unknown_task_is_404():
    store = InMemoryStore()

    with pytest.raises(DomainError) as exc_info:
        asyncio.run(_service(store).complete_task(uuid.uuid4(), "evening_prayer", TODAY))

    assert exc_info.value.status_code == 404
    assert store.daily == {}


def test_save_failure_raises_data_access_error():
    store = InMemoryStore()
    service = _service(store)
    service._progress_repo.upsert_entry = AsyncMock(
        side_effect=OperationalError("INSERT INTO daily_tasks_progress", {}, Exception("down"))
    )

    with pytest.raises(DataAccessError):
        asyncio.run(service.complete_task(uuid.uuid4(), "daily_study", TODAY))


def test_verse_of_the_day_is_saved_without_navigation():
    """Стих дня отслеживается, но в «Путь дня» не входит."""
    user_id = uuid.uuid4()
    store = InMemoryStore()
    service = _service(store)

    result = asyncio.run(service.complete_task(user_id, "verse_of_the_day", TODAY))
    status, progress = asyncio.run(service.get_progress(user_id, TODAY))

    assert result.navigation is None
    assert status.is_verse_of_the_day_task_completed is True
    assert progress.completed_count == 0


class _FlakyProfilesRepo(FakeProfilesRepo):
    """Первый инкремент падает, дальше работает как обычно."""

    def __init__(self, store):
        super().__init__(store)
        self.failures_left = 1

    async def increment_counter(self, db, user_id, field, commit=True):
        if self.failures_left:
            self.failures_left -= 1
            raise OperationalError("UPDATE profiles", {}, Exception("connection reset"))
        return await super().increment_counter(db, user_id, field, commit)


def test_failed_journal_counter_rolls_back_entry_and_retry_counts():
    user_id = uuid.uuid4()
    store = InMemoryStore()
    service = _service(store)
    service._profiles_repo = _FlakyProfilesRepo(store)

    with pytest.raises(DataAccessError):
        asyncio.run(service.complete_task(user_id, "spiritual_journal", TODAY, "Obrigado"))

    # запись и счётчик — одна транзакция: после сбоя нет ни того, ни другого
    assert (user_id, "spiritual_journal", TODAY) not in store.daily
    assert user_id not in store.profiles

    asyncio.run(service.complete_task(user_id, "spiritual_journal", TODAY, "Obrigado"))

    assert store.daily[(user_id, "spiritual_journal", TODAY)] == "Obrigado"
    assert store.profiles[user_id]["total_journal_entries"] == 1


def test_entry_and_counter_committed_once():
    user_id = uuid.uuid4()
    store = InMemoryStore()
    sessions = []

    class _Factory(CountingSessionFactory):
        def __call__(self):
            session = super().__call__()
            sessions.append(session)
            return session

    service = DailyTasksService(
        _Factory(),
        progress_repo=FakeDailyTasksProgressRepo(store),
        profiles_repo=FakeProfilesRepo(store),
        achievement_engine=_service(store)._engine,
    )

    asyncio.run(service.complete_task(user_id, "spiritual_journal", TODAY))

    assert [s.commits for s in sessions if s.commits] == [1]
    assert store.profiles[user_id]["total_journal_entries"] == 1
