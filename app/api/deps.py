# app/api/deps.py
from datetime import timedelta
from functools import lru_cache

from fastapi import Security, HTTPException
from fastapi.security.api_key import APIKeyQuery

from app.core.config import Settings
from app.services.achievement_engine_service import AchievementEngineService
from app.services.achievements_service import AchievementsService
from app.services.activity_log_service import ActivityLogService
from app.services.daily_tasks_service import DailyTasksService
from app.services.study_activity_service import StudyActivityService

settings = Settings()
api_key_query = APIKeyQuery(name="api_key", auto_error=False)

async def get_api_key(
    key: str | None = Security(api_key_query),
) -> str:
    """
    Проверка api_key в query-параметрах.
    """
    if not key or key not in settings.valid_api_keys:
        raise HTTPException(403, "Invalid or missing API Key")
    return key


# Сервисы создаются один раз на процесс: кэш флага журнала живёт в ActivityLogService.
# В тестах подменяются через app.dependency_overrides.

@lru_cache
def get_activity_log_service() -> ActivityLogService:
    return ActivityLogService(
        cache_ttl=timedelta(seconds=settings.user_logging_cache_seconds),
    )


@lru_cache
def get_achievement_engine() -> AchievementEngineService:
    return AchievementEngineService()


@lru_cache
def get_achievements_service() -> AchievementsService:
    return AchievementsService(activity_log=get_activity_log_service())


@lru_cache
def get_daily_tasks_service() -> DailyTasksService:
    return DailyTasksService(achievement_engine=get_achievement_engine())


@lru_cache
def get_study_activity_service() -> StudyActivityService:
    return StudyActivityService(
        achievement_engine=get_achievement_engine(),
        activity_log=get_activity_log_service(),
    )
