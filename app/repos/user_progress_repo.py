# app/repos/user_progress_repo.py

import uuid
from datetime import datetime
from typing import List, Optional, Tuple
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user_progress import UserProgress
from app.repos.base import BaseRepository


class UserProgressRepository(BaseRepository[UserProgress]):
    """
    Репозиторий прогресса пользователей по главам.
    """
    def __init__(self) -> None:
        super().__init__(UserProgress)

    async def list_completed_pairs(
        self, db: AsyncSession, user_id: uuid.UUID
    ) -> List[Tuple[uuid.UUID, Optional[uuid.UUID]]]:
        """Пары (chapter_id, study_id) пройденных пользователем глав (completed_at не NULL)."""
        res = await db.execute(
            select(UserProgress.chapter_id, UserProgress.study_id).where(
                UserProgress.user_id == user_id,
                UserProgress.completed_at.is_not(None),
            )
        )
        return [(row[0], row[1]) for row in res.all()]

    async def mark_completed(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        chapter_id: uuid.UUID,
        study_id: Optional[uuid.UUID],
        completed_at: datetime,
    ) -> None:
        """
        Идемпотентно отметить главу пройденной.
        Если глава уже была пройдена, исходное completed_at сохраняется.
        """
        stmt = insert(UserProgress).values(
            user_id=user_id,
            chapter_id=chapter_id,
            study_id=study_id,
            completed_at=completed_at,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "chapter_id"],
            set_={
                "study_id": stmt.excluded.study_id,
                "completed_at": stmt.excluded.completed_at,
            },
            where=UserProgress.completed_at.is_(None),
        )
        await db.execute(stmt)
        await db.commit()
