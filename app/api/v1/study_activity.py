# app/api/v1/study_activity.py
"""
Учебная активность: прохождение главы и «поделиться».
"""
from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Body, Depends, Path

from app.api.deps import get_api_key, get_study_activity_service
from app.schemas.achievements import AchievementRead
from app.schemas.daily_tasks_api import ChapterCompleteResponse, ShareRequest, ShareResponse
from app.services.study_activity_service import StudyActivityService

router = APIRouter(prefix="/users/{user_id}", tags=["study_activity"], dependencies=[Depends(get_api_key)])
logger = logging.getLogger("api.study_activity")


@router.post(
    "/chapters/{chapter_id}/complete",
    response_model=ChapterCompleteResponse,
    summary="Отметить главу пройденной (идемпотентно)",
)
async def complete_chapter(
    user_id: uuid.UUID = Path(..., description="ID пользователя"),
    chapter_id: uuid.UUID = Path(..., description="ID главы"),
    service: StudyActivityService = Depends(get_study_activity_service),
) -> ChapterCompleteResponse:
    new_achievements = await service.complete_chapter(user_id, chapter_id)
    return ChapterCompleteResponse(
        ok=True,
        chapter_id=chapter_id,
        new_achievements=[AchievementRead.model_validate(a) for a in new_achievements],
    )


@router.post(
    "/shares",
    response_model=ShareResponse,
    summary="Учесть публикацию контента",
)
async def record_share(
    user_id: uuid.UUID = Path(..., description="ID пользователя"),
    body: ShareRequest = Body(...),
    service: StudyActivityService = Depends(get_study_activity_service),
) -> ShareResponse:
    total_shares, new_achievements = await service.record_share(user_id, body.description)
    return ShareResponse(
        total_shares=total_shares,
        new_achievements=[AchievementRead.model_validate(a) for a in new_achievements],
    )
