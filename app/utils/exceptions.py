# app/utils/exceptions.py
from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """
    Базовая доменная ошибка приложения.
    Её перехватывает глобальный хэндлер и возвращает предсказуемый HTTP-ответ.
    """

    def __init__(self, detail: str, *, status_code: int = 400, payload: Optional[dict[str, Any]] = None) -> None:
        """
        Args:
            detail: Человеко-понятное описание проблемы (не для отладки).
            status_code: Желаемый HTTP-статус (400 по умолчанию).
            payload: Доп. данные, безопасные к отдаче клиенту (опционально).
        """
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code
        self.payload = payload or {}


class DataAccessError(DomainError):
    """
    Ошибка чтения/записи на границе хранилища.
    Оценка достижений прерывается целиком; клиенту — временная ошибка (503),
    повторный вызов безопасен.
    """

    def __init__(self, detail: str = "Data store is temporarily unavailable", *, payload: Optional[dict[str, Any]] = None) -> None:
        super().__init__(detail, status_code=503, payload=payload)


class ConfigurationDefect(DomainError):
    """Ошибка конфигурации последовательности ежедневных заданий (ошибка программиста)."""
