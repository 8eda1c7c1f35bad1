# app/schemas/daily_tasks_api.py
"""
Pydantic-схемы запросов и ответов API ежедневных заданий.
"""
from __future__ import annotations

import uuid
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.achievements import AchievementRead


class DailyTaskRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    path: str


class TaskCompletionStatusRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    is_journal_completed: bool = False
    is_daily_study_task_completed: bool = False
    is_quick_reflection_task_completed: bool = False
    is_inspirational_quote_task_completed: bool = False
    is_my_prayer_task_completed: bool = False
    is_verse_of_the_day_task_completed: bool = False


class TaskNavigationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    next_task_path: Optional[str] = None
    previous_task_path: Optional[str] = None
    is_first_task: bool
    is_sequence_complete: bool


class DailyProgressRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    completed_count: int
    total: int
    percentage: float


class DailyTasksStateResponse(BaseModel):
    task_date: date
    status: TaskCompletionStatusRead
    progress: DailyProgressRead


# ----- Complete task -----

class DailyTaskCompleteRequest(BaseModel):
    task_date: Optional[date] = Field(default=None, description="Локальная дата пользователя (по умолчанию сегодня)")
    value: Optional[str] = Field(default=None, max_length=5000, description="Ответ пользователя")


class DailyTaskCompleteResponse(BaseModel):
    task_name: str
    task_date: date
    navigation: Optional[TaskNavigationRead] = None
    new_achievements: List[AchievementRead] = []


# ----- Activity events -----

class ChapterCompleteResponse(BaseModel):
    ok: bool = True
    chapter_id: uuid.UUID
    new_achievements: List[AchievementRead] = []


class ShareRequest(BaseModel):
    description: str = Field(..., max_length=500, description="Что именно опубликовано")


class ShareResponse(BaseModel):
    total_shares: int
    new_achievements: List[AchievementRead] = []
