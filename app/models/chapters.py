from __future__ import annotations
from typing import TYPE_CHECKING, Optional
import uuid
from sqlalchemy import Integer, String, Text, ForeignKeyConstraint, PrimaryKeyConstraint, Index, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base

if TYPE_CHECKING:
    from app.models.studies import Studies


class Chapters(Base):
    """
    Главы исследования. Исследование считается пройденным, когда пройдены все его главы.
    """
    __tablename__ = "chapters"
    __table_args__ = (
        ForeignKeyConstraint(
            ["study_id"], ["studies.id"],
            ondelete="CASCADE", name="chapters_study_id_fkey"
        ),
        PrimaryKeyConstraint("id", name="chapters_pkey"),
        Index("idx_chapters_study_id", "study_id"),
        {"comment": "Главы исследований"},
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"), comment="ID главы"
    )
    study_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, comment="ID исследования")
    title: Mapped[str] = mapped_column(String, nullable=False, comment="Заголовок главы")
    content: Mapped[Optional[str]] = mapped_column(Text, comment="Текст главы")
    order_number: Mapped[int] = mapped_column(
        Integer, server_default=text("0"), nullable=False, comment="Порядок внутри исследования"
    )

    study: Mapped["Studies"] = relationship("Studies", back_populates="chapters")
