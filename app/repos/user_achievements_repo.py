# app/repos/user_achievements_repo.py

import uuid
from datetime import datetime
from typing import List, Sequence
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user_achievements import UserAchievements
from app.repos.base import BaseRepository


class UserAchievementsRepository(BaseRepository[UserAchievements]):
    """
    Репозиторий для связей пользователей и их достижений.
    Только чтение и вставка: полученные достижения не изменяются и не удаляются.
    """
    def __init__(self) -> None:
        super().__init__(UserAchievements)

    async def list_achievement_ids(
        self, db: AsyncSession, user_id: uuid.UUID
    ) -> List[uuid.UUID]:
        """ID уже полученных пользователем достижений."""
        res = await db.execute(
            select(UserAchievements.achievement_id).where(UserAchievements.user_id == user_id)
        )
        return list(res.scalars().all())

    async def insert_unlocks(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        achievement_ids: Sequence[uuid.UUID],
        unlocked_at: datetime,
    ) -> List[UserAchievements]:
        """
        Записать полученные достижения одной пачкой.
        Политика конфликтов: всё или ничего — если хотя бы одна пара
        (user_id, achievement_id) уже есть, вся пачка откатывается (IntegrityError).
        """
        return await self.batch_create(
            db,
            [
                {"user_id": user_id, "achievement_id": achievement_id, "unlocked_at": unlocked_at}
                for achievement_id in achievement_ids
            ],
        )
