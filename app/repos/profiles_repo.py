# app/repos/profiles_repo.py

import uuid
from typing import Optional
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.profiles import Profiles
from app.repos.base import BaseRepository

# Счётчики, которые разрешено инкрементировать через increment_counter
COUNTER_FIELDS = ("streak_count", "total_shares", "total_journal_entries")


class ProfilesRepository(BaseRepository[Profiles]):
    """
    Репозиторий профилей пользователей.
    """
    def __init__(self) -> None:
        super().__init__(Profiles)

    async def get_counters(
        self, db: AsyncSession, user_id: uuid.UUID
    ) -> Optional[dict[str, int]]:
        """
        Счётчики активности профиля.
        Возвращает None, если профиля нет (это не ошибка: новый пользователь).
        """
        res = await db.execute(
            select(
                Profiles.streak_count,
                Profiles.total_shares,
                Profiles.total_journal_entries,
            ).where(Profiles.id == user_id)
        )
        row = res.first()
        if row is None:
            return None
        return {
            "streak_count": row[0] or 0,
            "total_shares": row[1] or 0,
            "total_journal_entries": row[2] or 0,
        }

    async def increment_counter(
        self, db: AsyncSession, user_id: uuid.UUID, field: str, commit: bool = True
    ) -> int:
        """
        Атомарно увеличить счётчик профиля на 1 (профиль создаётся при отсутствии).
        Возвращает новое значение. commit=False — в транзакции вызывающего кода.
        """
        if field not in COUNTER_FIELDS:
            raise ValueError(f"Unknown profile counter '{field}'")
        column = getattr(Profiles, field)
        stmt = insert(Profiles).values(id=user_id, **{field: 1})
        stmt = stmt.on_conflict_do_update(
            index_elements=["id"],
            set_={field: column + 1},
        ).returning(column)
        res = await db.execute(stmt)
        value = res.scalar_one()
        if commit:
            await db.commit()
        return value
