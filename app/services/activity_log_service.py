# app/services/activity_log_service.py
"""
Журнал действий пользователей и администраторов.

Запись в user_logs управляется глобальным флагом app_settings.user_logging_enabled.
Флаг кэшируется в явном объекте LoggingStatusCache; время передаётся снаружи,
поэтому кэш тестируется без глобального состояния и без sleep.
Ошибки записи журнала логируются и никогда не пробрасываются.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError

from app.repos.activity_logs_repo import AdminLogsRepository, UserLogsRepository
from app.repos.app_settings_repo import AppSettingsRepository

logger = logging.getLogger(__name__)

USER_LOGGING_SETTING_KEY = "user_logging_enabled"
DEFAULT_CACHE_TTL = timedelta(minutes=5)


@dataclass
class LoggingStatusCache:
    """Закэшированное значение флага и момент, после которого оно устаревает."""

    value: Optional[bool] = None
    expires_at: Optional[datetime] = None

    def is_stale(self, now: datetime) -> bool:
        return self.value is None or self.expires_at is None or now >= self.expires_at

    def store(self, value: bool, now: datetime, ttl: timedelta) -> bool:
        self.value = value
        self.expires_at = now + ttl
        return value


class ActivityLogService:
    """
    Сервис журналов активности.
    """

    def __init__(
        self,
        session_factory: Optional[Callable[[], Any]] = None,
        *,
        cache: Optional[LoggingStatusCache] = None,
        cache_ttl: timedelta = DEFAULT_CACHE_TTL,
        settings_repo: Optional[AppSettingsRepository] = None,
        user_logs_repo: Optional[UserLogsRepository] = None,
        admin_logs_repo: Optional[AdminLogsRepository] = None,
    ) -> None:
        if session_factory is None:
            from app.db.session import async_session_factory
            session_factory = async_session_factory
        self._session_factory = session_factory
        self.cache = cache if cache is not None else LoggingStatusCache()
        self._cache_ttl = cache_ttl
        self._settings_repo = settings_repo or AppSettingsRepository()
        self._user_logs_repo = user_logs_repo or UserLogsRepository()
        self._admin_logs_repo = admin_logs_repo or AdminLogsRepository()

    async def is_user_logging_enabled(self, now: Optional[datetime] = None) -> bool:
        """
        Включена ли запись журнала пользователей.
        Нет строки настройки -> выключено; ошибка чтения -> включено
        (чтобы не терять записи), результат кэшируется в обоих случаях.
        """
        now = now or datetime.now(timezone.utc)
        if not self.cache.is_stale(now):
            return bool(self.cache.value)

        try:
            async with self._session_factory() as db:
                raw = await self._settings_repo.get_value(db, USER_LOGGING_SETTING_KEY)
        except SQLAlchemyError as exc:
            logger.error("failed to read %s: %s", USER_LOGGING_SETTING_KEY, exc)
            return self.cache.store(True, now, self._cache_ttl)

        return self.cache.store(raw == "true", now, self._cache_ttl)

    async def log_user_activity(
        self,
        user_id: uuid.UUID,
        event_type: str,
        description: str,
        now: Optional[datetime] = None,
    ) -> bool:
        """Записать действие пользователя. Возвращает True, если запись сделана."""
        if not await self.is_user_logging_enabled(now):
            return False
        try:
            async with self._session_factory() as db:
                await self._user_logs_repo.create(
                    db,
                    {"user_id": user_id, "event_type": event_type, "description": description},
                )
        except SQLAlchemyError as exc:
            logger.error("failed to log user activity %s for user_id=%s: %s", event_type, user_id, exc)
            return False
        return True

    async def log_admin_activity(
        self,
        admin_user_id: uuid.UUID,
        event_type: str,
        description: str,
    ) -> bool:
        """Записать действие администратора (всегда, без учёта флага)."""
        try:
            async with self._session_factory() as db:
                await self._admin_logs_repo.create(
                    db,
                    {"admin_user_id": admin_user_id, "event_type": event_type, "description": description},
                )
        except SQLAlchemyError as exc:
            logger.error("failed to log admin activity %s for admin_user_id=%s: %s", event_type, admin_user_id, exc)
            return False
        return True
