# app/repos/base.py

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.base import Base


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic-репозиторий с общими операциями:
      - get
      - list_all для небольших справочников
      - create и batch-создание
    Наследники передают модель в конструктор и добавляют свои запросы.
    Коммит делают методы записи; методы чтения сессию не коммитят.
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        """Получить объект по первичному ключу."""
        return await db.get(self.model, id)

    async def list_all(self, db: AsyncSession) -> List[ModelType]:
        """Все объекты таблицы."""
        res = await db.execute(select(self.model))
        return res.scalars().all()

    async def batch_create(
        self,
        db: AsyncSession,
        objs_in: List[Dict[str, Any]]
    ) -> List[ModelType]:
        """
        Пакетное создание объектов одной транзакцией.
        При нарушении любого ограничения откатывается вся пачка.
        После коммита объекты не перечитываются: успешный коммит = записи созданы.
        """
        objs = [self.model(**data) for data in objs_in]
        db.add_all(objs)
        try:
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return objs

    async def create(
        self,
        db: AsyncSession,
        obj_in: Dict[str, Any]
    ) -> ModelType:
        """Создать одну запись из словаря."""
        obj = self.model(**obj_in)
        db.add(obj)
        await db.commit()
        await db.refresh(obj)
        return obj
