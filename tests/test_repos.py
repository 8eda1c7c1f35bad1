"""
Проверка репозиториев на сессии-заглушке (без БД): транзакционные
границы пакетной вставки полученных достижений.
"""
import asyncio
import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from app.repos.user_achievements_repo import UserAchievementsRepository


def _session():
    db = MagicMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock(side_effect=OperationalError("SELECT user_achievements", {}, Exception("down")))
    return db


def test_insert_unlocks_commits_once_without_reread():
    """После коммита строки не перечитываются: сбой чтения не превращает успешную выдачу в ошибку."""
    db = _session()
    user_id = uuid.uuid4()
    ids = [uuid.uuid4(), uuid.uuid4()]
    now = datetime(2026, 10, 17, tzinfo=timezone.utc)

    rows = asyncio.run(UserAchievementsRepository().insert_unlocks(db, user_id, ids, now))

    assert [r.achievement_id for r in rows] == ids
    assert all(r.user_id == user_id and r.unlocked_at == now for r in rows)
    db.add_all.assert_called_once()
    db.commit.assert_awaited_once()
    db.refresh.assert_not_awaited()


def test_insert_unlocks_rolls_back_whole_batch():
    db = _session()
    db.commit.side_effect = IntegrityError("INSERT INTO user_achievements", {}, Exception("duplicate key"))

    with pytest.raises(IntegrityError):
        asyncio.run(UserAchievementsRepository().insert_unlocks(db, uuid.uuid4(), [uuid.uuid4()], datetime.now(timezone.utc)))

    db.rollback.assert_awaited_once()
