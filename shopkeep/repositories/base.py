"""
Generic storage access over one mapped model.

Repositories add, flush and delete but never commit: the calling service
owns the transaction and commits once per request.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shopkeep.core.utils import paginate_query
from .specs import Spec

ModelT = TypeVar('ModelT')
IdT = TypeVar('IdT')


class BaseRepository(Generic[ModelT, IdT]):
    model: Type[ModelT]

    def __init__(self, db: AsyncSession):
        self.db = db

    def _select(self, *specs: Spec):
        query = select(self.model)
        for spec in specs:
            query = query.where(spec.to_clause(self.model))
        return query

    def _ordered(self, query, order_by):
        if order_by is None:
            return query.order_by(self.model.id)
        if isinstance(order_by, (list, tuple)):
            return query.order_by(*order_by)
        return query.order_by(order_by)

    def ordering(self, field: str, descending: bool = False) -> List[Any]:
        """Sort on one column, with the primary key breaking ties."""
        column = getattr(self.model, field, None)
        if column is None:
            raise AttributeError(f"{self.model.__name__} has no column '{field}'")
        return [column.desc() if descending else column.asc(), self.model.id]

    async def create(self, entity: ModelT) -> ModelT:
        self.db.add(entity)
        await self.db.flush()
        return entity

    async def get_by_id(self, entity_id: IdT, for_update: bool = False) -> Optional[ModelT]:
        """
        Fetch one row by primary key.

        With ``for_update`` the row is locked (SELECT ... FOR UPDATE) until
        the surrounding transaction ends.
        """
        query = select(self.model).where(self.model.id == entity_id)
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def update(self, entity: ModelT, values: Dict[str, Any]) -> ModelT:
        for key, value in values.items():
            if not hasattr(entity, key):
                raise AttributeError(f"{self.model.__name__} has no attribute '{key}'")
            setattr(entity, key, value)
        await self.db.flush()
        return entity

    async def delete(self, entity: ModelT) -> None:
        await self.db.delete(entity)
        await self.db.flush()

    async def find_all(self, *specs: Spec, order_by=None) -> List[ModelT]:
        query = self._ordered(self._select(*specs), order_by)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def find_one(self, *specs: Spec) -> Optional[ModelT]:
        result = await self.db.execute(self._select(*specs).limit(1))
        return result.scalars().first()

    async def count(self, *specs: Spec) -> int:
        query = select(func.count()).select_from(self.model)
        for spec in specs:
            query = query.where(spec.to_clause(self.model))
        return await self.db.scalar(query) or 0

    async def exists(self, *specs: Spec) -> bool:
        condition = exists().select_from(self.model)
        for spec in specs:
            condition = condition.where(spec.to_clause(self.model))
        return bool(await self.db.scalar(select(condition)))

    async def list(self, *specs: Spec, page: int = 1, page_size: int = 20, order_by=None) -> Dict[str, Any]:
        """Page through rows matching ``specs``; see ``paginate_query`` for the result shape."""
        query = self._ordered(self._select(*specs), order_by)
        return await paginate_query(query, self.db, page=page, page_size=page_size)
