# app/schemas/achievements.py
from __future__ import annotations
import uuid
from typing import List, Optional
from pydantic import BaseModel, ConfigDict


class AchievementRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: Optional[str] = None
    icon_name: Optional[str] = None


class ConditionSnapshotRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_completed_chapters: int
    completed_studies: List[uuid.UUID]
    streak_count: int
    total_shares: int
    total_journal_entries: int


class AchievementProgressRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    current: int
    target: int
    unit: str


class AchievementStatusRead(BaseModel):
    achievement: AchievementRead
    unlocked: bool
    progress: AchievementProgressRead


class EvaluationRead(BaseModel):
    newly_unlocked: List[AchievementRead]
    snapshot: ConditionSnapshotRead


class CatalogSyncResponse(BaseModel):
    inserted: List[str]
