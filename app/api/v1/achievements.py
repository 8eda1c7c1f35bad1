# app/api/v1/achievements.py
"""
Достижения пользователя: проверка/выдача и экран прогресса.
"""
from __future__ import annotations

import logging
import uuid
from typing import List

from fastapi import APIRouter, Depends, Path

from app.api.deps import get_achievement_engine, get_api_key
from app.schemas.achievements import (
    AchievementProgressRead,
    AchievementRead,
    AchievementStatusRead,
    ConditionSnapshotRead,
    EvaluationRead,
)
from app.services.achievement_engine_service import AchievementEngineService

router = APIRouter(
    prefix="/users/{user_id}/achievements",
    tags=["achievements"],
    dependencies=[Depends(get_api_key)],
)
logger = logging.getLogger("api.achievements")


@router.post(
    "/evaluate",
    response_model=EvaluationRead,
    summary="Проверить условия и выдать новые достижения",
)
async def evaluate_achievements(
    user_id: uuid.UUID = Path(..., description="ID пользователя"),
    engine: AchievementEngineService = Depends(get_achievement_engine),
) -> EvaluationRead:
    # DataAccessError -> 503 через глобальный хэндлер DomainError
    result = await engine.evaluate(user_id)
    snapshot = result.snapshot
    return EvaluationRead(
        newly_unlocked=[AchievementRead.model_validate(a) for a in result.newly_unlocked],
        snapshot=ConditionSnapshotRead(
            total_completed_chapters=snapshot.total_completed_chapters,
            completed_studies=sorted(snapshot.completed_studies, key=str),
            streak_count=snapshot.streak_count,
            total_shares=snapshot.total_shares,
            total_journal_entries=snapshot.total_journal_entries,
        ),
    )


@router.get(
    "",
    response_model=List[AchievementStatusRead],
    summary="Все достижения с отметкой «получено» и прогрессом",
)
async def list_achievements(
    user_id: uuid.UUID = Path(..., description="ID пользователя"),
    engine: AchievementEngineService = Depends(get_achievement_engine),
) -> List[AchievementStatusRead]:
    items = await engine.list_progress(user_id)
    return [
        AchievementStatusRead(
            achievement=AchievementRead.model_validate(item.achievement),
            unlocked=item.unlocked,
            progress=AchievementProgressRead.model_validate(item.progress),
        )
        for item in items
    ]
