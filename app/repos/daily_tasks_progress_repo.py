# app/repos/daily_tasks_progress_repo.py

import uuid
from datetime import date
from typing import List, Optional
from sqlalchemy import literal_column, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.daily_tasks_progress import DailyTasksProgress
from app.repos.base import BaseRepository


class DailyTasksProgressRepository(BaseRepository[DailyTasksProgress]):
    """
    Репозиторий выполнения ежедневных заданий.
    """
    def __init__(self) -> None:
        super().__init__(DailyTasksProgress)

    async def list_task_names(
        self, db: AsyncSession, user_id: uuid.UUID, task_date: date
    ) -> List[str]:
        """Имена заданий, выполненных пользователем в указанную дату."""
        res = await db.execute(
            select(DailyTasksProgress.task_name).where(
                DailyTasksProgress.user_id == user_id,
                DailyTasksProgress.task_date == task_date,
            )
        )
        return list(res.scalars().all())

    async def upsert_entry(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        task_name: str,
        task_date: date,
        value: Optional[str],
        commit: bool = True,
    ) -> bool:
        """
        Сохранить выполнение задания за день (повторное сохранение перезаписывает value).
        Возвращает True, если строка вставлена, а не обновлена: решает сам INSERT
        (xmax = 0 у только что вставленной версии строки), без отдельного SELECT.
        commit=False — запись остаётся в транзакции вызывающего кода.
        """
        stmt = insert(DailyTasksProgress).values(
            user_id=user_id,
            task_name=task_name,
            task_date=task_date,
            value=value,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "task_name", "task_date"],
            set_={"value": stmt.excluded.value},
        ).returning(literal_column("(xmax = 0)"))
        res = await db.execute(stmt)
        created = bool(res.scalar_one())
        if commit:
            await db.commit()
        return created
