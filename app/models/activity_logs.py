from __future__ import annotations
from typing import Optional
from datetime import datetime
import uuid
from sqlalchemy import DateTime, String, Text, PrimaryKeyConstraint, Index, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class UserLogs(Base):
    """
    Журнал действий пользователей (вход, покупки, «поделиться» и т.п.).
    Пишется только при включённом app_settings.user_logging_enabled.
    """
    __tablename__ = "user_logs"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="user_logs_pkey"),
        Index("idx_user_logs_user_created", "user_id", "created_at"),
        {"comment": "Журнал действий пользователей"},
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"), comment="ID записи"
    )
    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, comment="ID пользователя")
    event_type: Mapped[str] = mapped_column(String(64), nullable=False, comment="Тип события")
    description: Mapped[Optional[str]] = mapped_column(Text, comment="Описание")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=text("now()"), nullable=False, comment="Когда"
    )


class AdminLogs(Base):
    """
    Журнал действий администраторов. Пишется всегда.
    """
    __tablename__ = "admin_logs"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="admin_logs_pkey"),
        Index("idx_admin_logs_admin_created", "admin_user_id", "created_at"),
        {"comment": "Журнал действий администраторов"},
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"), comment="ID записи"
    )
    admin_user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, comment="ID администратора")
    event_type: Mapped[str] = mapped_column(String(64), nullable=False, comment="Тип события")
    description: Mapped[Optional[str]] = mapped_column(Text, comment="Описание")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=text("now()"), nullable=False, comment="Когда"
    )
