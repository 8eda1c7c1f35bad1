# app/repos/chapters_repo.py

import uuid
from typing import List, Tuple
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.chapters import Chapters
from app.repos.base import BaseRepository


class ChaptersRepository(BaseRepository[Chapters]):
    """
    Репозиторий глав.
    """
    def __init__(self) -> None:
        super().__init__(Chapters)

    async def list_study_refs(
        self, db: AsyncSession
    ) -> List[Tuple[uuid.UUID, uuid.UUID]]:
        """Пары (chapter_id, study_id) по всем главам."""
        res = await db.execute(select(Chapters.id, Chapters.study_id))
        return [(row[0], row[1]) for row in res.all()]
