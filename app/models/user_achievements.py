from __future__ import annotations
from typing import TYPE_CHECKING
from datetime import datetime
import uuid
from sqlalchemy import (
    DateTime,
    ForeignKeyConstraint,
    PrimaryKeyConstraint,
    Index,
    text,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base

if TYPE_CHECKING:
    from app.models.achievements import Achievements
    
class UserAchievements(Base):
    """
    Полученные пользователями достижения. Пара (user_id, achievement_id) уникальна:
    повторная выдача отклоняется первичным ключом.
    """
    __tablename__ = "user_achievements"
    __table_args__ = (
        ForeignKeyConstraint(
            ["achievement_id"], ["achievements.id"],
            ondelete="CASCADE", name="user_achievements_achievement_id_fkey"
        ),
        PrimaryKeyConstraint("user_id", "achievement_id", name="user_achievements_pkey"),
        Index("idx_user_achievements", "user_id", "unlocked_at"),
        {"comment": "Связь пользователей с достижениями"},
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, comment="ID пользователя"
    )
    achievement_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, comment="ID достижения"
    )
    unlocked_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("now()"),
        nullable=False,
        comment="Когда получено"
    )

    achievement: Mapped["Achievements"] = relationship(
        "Achievements", back_populates="user_achievements"
    )
