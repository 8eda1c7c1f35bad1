from __future__ import annotations
from typing import Optional
from sqlalchemy import String, PrimaryKeyConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class AppSettings(Base):
    """
    Глобальные настройки приложения (ключ-значение, значения строками).
    """
    __tablename__ = "app_settings"
    __table_args__ = (
        PrimaryKeyConstraint("key", name="app_settings_pkey"),
        {"comment": "Настройки приложения"},
    )

    key: Mapped[str] = mapped_column(String(128), primary_key=True, comment="Ключ настройки")
    value: Mapped[Optional[str]] = mapped_column(String, comment="Значение")
