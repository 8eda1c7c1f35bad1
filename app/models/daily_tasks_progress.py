from __future__ import annotations
from typing import Optional
from datetime import date, datetime
import uuid
from sqlalchemy import Date, DateTime, String, Text, PrimaryKeyConstraint, UniqueConstraint, Index, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class DailyTasksProgress(Base):
    """
    Выполнение ежедневных заданий: одна строка на (пользователь, задание, дата).
    Наличие строки означает, что задание за этот день выполнено.
    """
    __tablename__ = "daily_tasks_progress"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="daily_tasks_progress_pkey"),
        UniqueConstraint("user_id", "task_name", "task_date", name="daily_tasks_progress_user_task_date_key"),
        Index("idx_daily_tasks_progress_user_date", "user_id", "task_date"),
        {"comment": "Ежедневные задания пользователей"},
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"), comment="ID записи"
    )
    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, comment="ID пользователя")
    task_name: Mapped[str] = mapped_column(String(64), nullable=False, comment="Имя задания")
    task_date: Mapped[date] = mapped_column(Date, nullable=False, comment="Локальная дата выполнения")
    value: Mapped[Optional[str]] = mapped_column(Text, comment="Ответ пользователя (запись дневника и т.п.)")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("now()"),
        nullable=False,
        comment="Когда сохранено"
    )
