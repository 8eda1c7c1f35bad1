# app/repos/studies_repo.py

import uuid
from typing import List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.studies import Studies
from app.repos.base import BaseRepository


class StudiesRepository(BaseRepository[Studies]):
    """
    Репозиторий исследований.
    """
    def __init__(self) -> None:
        super().__init__(Studies)

    async def list_ids(self, db: AsyncSession) -> List[uuid.UUID]:
        """ID всех исследований."""
        res = await db.execute(select(Studies.id))
        return list(res.scalars().all())
