# app/repos/achievements_repo.py

from typing import Any, List, Sequence
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.achievements import Achievements
from app.repos.base import BaseRepository


class AchievementsRepository(BaseRepository[Achievements]):
    """
    Репозиторий хранимого каталога достижений.
    """
    def __init__(self) -> None:
        super().__init__(Achievements)

    async def insert_missing(
        self, db: AsyncSession, rows: Sequence[dict[str, Any]]
    ) -> List[str]:
        """
        Добавить достижения, которых ещё нет (по name); существующие не трогаем.
        Возвращает имена реально добавленных.
        """
        if not rows:
            return []
        stmt = (
            insert(Achievements)
            .values(list(rows))
            .on_conflict_do_nothing(index_elements=["name"])
            .returning(Achievements.name)
        )
        res = await db.execute(stmt)
        inserted = list(res.scalars().all())
        await db.commit()
        return inserted
