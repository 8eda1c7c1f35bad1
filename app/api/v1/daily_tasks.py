# app/api/v1/daily_tasks.py
"""
Ежедневные задания: последовательность, навигация, статус дня, сохранение.
"""
from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query, status

from app.api.deps import get_api_key, get_daily_tasks_service
from app.schemas.achievements import AchievementRead
from app.schemas.daily_tasks import TaskCompletionStatus
from app.schemas.daily_tasks_api import (
    DailyProgressRead,
    DailyTaskCompleteRequest,
    DailyTaskCompleteResponse,
    DailyTaskRead,
    DailyTasksStateResponse,
    TaskCompletionStatusRead,
    TaskNavigationRead,
)
from app.services.daily_tasks_sequence import DAILY_TASK_SEQUENCE
from app.services.daily_tasks_service import DailyTasksService

router = APIRouter(tags=["daily_tasks"], dependencies=[Depends(get_api_key)])
logger = logging.getLogger("api.daily_tasks")


# ----- GET /daily-tasks/sequence -----

@router.get(
    "/daily-tasks/sequence",
    response_model=List[DailyTaskRead],
    summary="Задания «Пути дня» по порядку",
)
async def get_sequence() -> List[DailyTaskRead]:
    return [DailyTaskRead.model_validate(task) for task in DAILY_TASK_SEQUENCE.tasks]


# ----- GET /daily-tasks/navigation -----

@router.get(
    "/daily-tasks/navigation",
    response_model=TaskNavigationRead,
    summary="Следующее/предыдущее задание по текущему и флагам выполнения",
)
async def get_navigation(
    current: str = Query(..., description="Имя текущего задания"),
    flags: TaskCompletionStatusRead = Depends(),
) -> TaskNavigationRead:
    if not DAILY_TASK_SEQUENCE.contains(current):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown daily task '{current}'",
        )
    navigation = DAILY_TASK_SEQUENCE.navigation(
        current, TaskCompletionStatus(**flags.model_dump())
    )
    return TaskNavigationRead.model_validate(navigation)


# ----- GET /users/{user_id}/daily-tasks -----

@router.get(
    "/users/{user_id}/daily-tasks",
    response_model=DailyTasksStateResponse,
    summary="Статус и прогресс ежедневных заданий за дату",
)
async def get_daily_tasks_state(
    user_id: uuid.UUID = Path(..., description="ID пользователя"),
    task_date: Optional[date] = Query(None, description="Дата (по умолчанию сегодня)"),
    service: DailyTasksService = Depends(get_daily_tasks_service),
) -> DailyTasksStateResponse:
    task_date = task_date or date.today()
    task_status, progress = await service.get_progress(user_id, task_date)
    return DailyTasksStateResponse(
        task_date=task_date,
        status=TaskCompletionStatusRead.model_validate(task_status),
        progress=DailyProgressRead.model_validate(progress),
    )


# ----- POST /users/{user_id}/daily-tasks/{task_name}/complete -----

@router.post(
    "/users/{user_id}/daily-tasks/{task_name}/complete",
    response_model=DailyTaskCompleteResponse,
    summary="Сохранить выполнение задания и получить следующий шаг «Пути дня»",
)
async def complete_daily_task(
    user_id: uuid.UUID = Path(..., description="ID пользователя"),
    task_name: str = Path(..., description="Имя задания"),
    body: Optional[DailyTaskCompleteRequest] = Body(None),
    service: DailyTasksService = Depends(get_daily_tasks_service),
) -> DailyTaskCompleteResponse:
    body = body or DailyTaskCompleteRequest()
    # неизвестное задание -> DomainError(404) через глобальный хэндлер
    result = await service.complete_task(
        user_id, task_name, body.task_date or date.today(), body.value
    )
    return DailyTaskCompleteResponse(
        task_name=result.task_name,
        task_date=result.task_date,
        navigation=(
            TaskNavigationRead.model_validate(result.navigation)
            if result.navigation is not None else None
        ),
        new_achievements=[AchievementRead.model_validate(a) for a in result.new_achievements],
    )
