from __future__ import annotations
from typing import TYPE_CHECKING, List, Optional
from datetime import datetime
import uuid
from sqlalchemy import DateTime, String, Text, PrimaryKeyConstraint, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base

if TYPE_CHECKING:
    from app.models.chapters import Chapters


class Studies(Base):
    """
    Библиотека исследований (учебных планов по Писанию).
    """
    __tablename__ = "studies"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="studies_pkey"),
        {"comment": "Исследования"},
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"), comment="ID исследования"
    )
    title: Mapped[str] = mapped_column(String, nullable=False, comment="Название")
    description: Mapped[Optional[str]] = mapped_column(Text, comment="Описание")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("now()"),
        nullable=False,
        comment="Дата создания"
    )

    chapters: Mapped[List["Chapters"]] = relationship("Chapters", back_populates="study")
