"""
Тесты синхронизации хранимого каталога достижений.
"""
import asyncio
import uuid
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from app.services.achievement_catalog import ACHIEVEMENT_DEFINITIONS
from app.services.achievements_service import AchievementsService
from app.utils.exceptions import DataAccessError
from fakes import CountingSessionFactory


def _service(inserted):
    repo = AsyncMock()
    repo.insert_missing.return_value = inserted
    return AchievementsService(CountingSessionFactory(), repo=repo, activity_log=AsyncMock())


def test_sync_sends_whole_catalog():
    service = _service(["Fogo Ardente"])

    inserted = asyncio.run(service.sync_catalog())

    assert inserted == ["Fogo Ardente"]
    rows = service.repo.insert_missing.await_args.args[1]
    assert [r["name"] for r in rows] == [d.name for d in ACHIEVEMENT_DEFINITIONS]
    service._activity_log.log_admin_activity.assert_not_awaited()


def test_sync_logs_admin_activity():
    admin_id = uuid.uuid4()
    service = _service([])

    asyncio.run(service.sync_catalog(admin_id))

    args = service._activity_log.log_admin_activity.await_args.args
    assert args[0] == admin_id and args[1] == "achievements_synced"


def test_sync_failure():
    service = _service([])
    service.repo.insert_missing.side_effect = OperationalError("INSERT INTO achievements", {}, Exception("down"))

    with pytest.raises(DataAccessError):
        asyncio.run(service.sync_catalog())
