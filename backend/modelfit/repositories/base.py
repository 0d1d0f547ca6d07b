"""Generic store capability set shared by every entity repository.

Repositories wrap a caller-owned ``AsyncSession``. They flush but never
commit; the request-scoped provider in ``modelfit.db.session`` owns the
transaction.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from modelfit.models.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    model: type[ModelT]

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find_by_id(self, record_id: str) -> ModelT | None:
        return await self.db.get(self.model, record_id)

    async def find_many(
        self,
        *filters: ColumnElement[bool],
        skip: int = 0,
        take: int | None = None,
        order_by: Sequence[Any] = (),
        options: Sequence[Any] = (),
    ) -> list[ModelT]:
        query = select(self.model).where(*filters)
        if options:
            query = query.options(*options)
        if order_by:
            query = query.order_by(*order_by)
        if skip:
            query = query.offset(skip)
        if take is not None:
            query = query.limit(take)
        result = await self.db.execute(query)
        return list(result.scalars().unique().all())

    async def count(self, *filters: ColumnElement[bool]) -> int:
        query = select(func.count(self.model.id)).where(*filters)
        return (await self.db.execute(query)).scalar_one()

    async def group_by(
        self,
        field: InstrumentedAttribute[Any],
        *filters: ColumnElement[bool],
    ) -> list[tuple[Any, int]]:
        """Return ``(value, count)`` rows in store iteration order (unsorted)."""
        query = (
            select(field, func.count(self.model.id))
            .where(*filters)
            .group_by(field)
        )
        result = await self.db.execute(query)
        return [(value, count) for value, count in result.all()]

    async def create(self, **values: Any) -> ModelT:
        record = self.model(**values)
        self.db.add(record)
        await self.db.flush()
        await self.db.refresh(record)
        return record

    async def update(self, record: ModelT, **values: Any) -> ModelT:
        for key, value in values.items():
            setattr(record, key, value)
        await self.db.flush()
        await self.db.refresh(record)
        return record
