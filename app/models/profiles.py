from __future__ import annotations
from typing import Optional
from datetime import datetime
import uuid
from sqlalchemy import DateTime, Integer, String, PrimaryKeyConstraint, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Profiles(Base):
    """
    Профиль пользователя: счётчики активности, на которых строятся достижения.
    id совпадает с id пользователя во внешнем сервисе аутентификации.
    """
    __tablename__ = "profiles"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="profiles_pkey"),
        {"comment": "Профили пользователей"},
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, comment="ID пользователя")
    first_name: Mapped[Optional[str]] = mapped_column(String, comment="Имя")
    last_name: Mapped[Optional[str]] = mapped_column(String, comment="Фамилия")
    streak_count: Mapped[int] = mapped_column(
        Integer, server_default=text("0"), nullable=False, comment="Серия дней подряд"
    )
    total_shares: Mapped[int] = mapped_column(
        Integer, server_default=text("0"), nullable=False, comment="Сколько раз делился контентом"
    )
    total_journal_entries: Mapped[int] = mapped_column(
        Integer, server_default=text("0"), nullable=False, comment="Записей в духовном дневнике"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("now()"),
        nullable=False,
        comment="Дата создания профиля"
    )
