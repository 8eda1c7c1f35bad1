# app/core/config.py

import os
from typing import List


class Settings:
    """
    Примитивная конфигурация приложения:
    всё берётся напрямую из os.environ (.env подгружается в run.py).
    """
    def __init__(self):
        # обязательные переменные
        try:
            self.database_url: str = os.environ["DATABASE_URL"]
            raw_keys = os.environ["VALID_API_KEYS"]
        except KeyError as e:
            raise RuntimeError(f"Missing required environment variable: {e}")

        # необязательные, с дефолтами
        self.log_level: str = os.environ.get("LOG_LEVEL", "INFO")
        self.log_dir: str = os.environ.get("LOG_DIR", "logs")

        # сколько секунд кэшируем флаг app_settings.user_logging_enabled
        try:
            self.user_logging_cache_seconds: int = int(
                os.environ.get("USER_LOGGING_CACHE_SECONDS", "300")
            )
        except ValueError as e:
            raise RuntimeError(f"USER_LOGGING_CACHE_SECONDS must be an integer: {e}")

        # валидируем и парсим список через запятую
        self.valid_api_keys: List[str] = [
            key.strip() for key in raw_keys.split(",") if key.strip()
        ]

        if not self.valid_api_keys:
            raise RuntimeError("VALID_API_KEYS must contain at least one key")
