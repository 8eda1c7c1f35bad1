from __future__ import annotations
from typing import Optional
from datetime import datetime
import uuid
from sqlalchemy import DateTime, ForeignKeyConstraint, PrimaryKeyConstraint, UniqueConstraint, Index, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class UserProgress(Base):
    """
    Прохождение глав пользователем. Глава пройдена, если completed_at не NULL.
    """
    __tablename__ = "user_progress"
    __table_args__ = (
        ForeignKeyConstraint(
            ["chapter_id"], ["chapters.id"],
            ondelete="CASCADE", name="user_progress_chapter_id_fkey"
        ),
        ForeignKeyConstraint(
            ["study_id"], ["studies.id"],
            ondelete="CASCADE", name="user_progress_study_id_fkey"
        ),
        PrimaryKeyConstraint("id", name="user_progress_pkey"),
        UniqueConstraint("user_id", "chapter_id", name="user_progress_user_chapter_key"),
        Index("idx_user_progress_user_id", "user_id"),
        {"comment": "Прогресс пользователей по главам"},
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"), comment="ID записи"
    )
    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, comment="ID пользователя")
    chapter_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, comment="ID главы")
    study_id: Mapped[Optional[uuid.UUID]] = mapped_column(UUID(as_uuid=True), comment="ID исследования")
    completed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), comment="Когда глава пройдена"
    )
