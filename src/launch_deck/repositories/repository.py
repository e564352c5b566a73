"""Data access helpers shared by the engines."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import case, func, select, update
from sqlalchemy.orm import Session

from launch_deck.db.session import Base

from .lookups import Lookup

ModelT = TypeVar("ModelT", bound=Base)

__all__ = ["Repository"]


class Repository(Generic[ModelT]):
    """Thin wrapper around a session for one mapped model."""

    def __init__(self, session: Session, model: type[ModelT]) -> None:
        """Initialize the repository with a SQLAlchemy session and model class."""
        self.session = session
        self.model = model

    def _select(self, lookups: Sequence[Lookup[Any]]):
        stmt = select(self.model)
        for lookup in lookups:
            stmt = stmt.where(lookup.clause())
        return stmt

    def get(self, entity_id: int, *, for_update: bool = False) -> ModelT | None:
        """Return an entity by primary key.

        With `for_update` the row is re-read from the database (discarding
        any in-memory state) and locked where the backend supports it.
        """
        if for_update:
            return self.session.get(
                self.model, entity_id, populate_existing=True, with_for_update=True
            )
        return self.session.get(self.model, entity_id)

    def first(self, *lookups: Lookup[Any]) -> ModelT | None:
        """Return the first entity matching every lookup."""
        return self.session.execute(self._select(lookups).limit(1)).scalars().first()

    def collect(self, *lookups: Lookup[Any], order_by: Any = None) -> list[ModelT]:
        """Return all entities matching every lookup, in primary-key order by default."""
        stmt = self._select(lookups)
        stmt = stmt.order_by(order_by if order_by is not None else self.model.id)
        return list(self.session.execute(stmt).scalars())

    def count(self, *lookups: Lookup[Any]) -> int:
        stmt = select(func.count()).select_from(self.model)
        for lookup in lookups:
            stmt = stmt.where(lookup.clause())
        return int(self.session.execute(stmt).scalar_one())

    def increment(self, entity_id: int, **deltas: int) -> ModelT | None:
        """Add `deltas` to integer columns in one UPDATE and return the fresh row.

        Pending changes are flushed first. Columns given a negative delta are
        floored at zero. The returned entity is re-read under a row lock and
        reflects every committed increment.
        """
        self.session.flush()
        values: dict[str, Any] = {}
        for name, delta in deltas.items():
            total = getattr(self.model, name) + delta
            values[name] = case((total < 0, 0), else_=total) if delta < 0 else total
        if values:
            stmt = (
                update(self.model)
                .where(self.model.id == entity_id)
                .values(values)
                .execution_options(synchronize_session=False)
            )
            self.session.execute(stmt)
        return self.get(entity_id, for_update=True)

    def add(self, entity: ModelT) -> ModelT:
        """Stage a new entity and flush so its primary key is assigned."""
        self.session.add(entity)
        self.session.flush()
        return entity

    def delete(self, entity: ModelT) -> None:
        self.session.delete(entity)
        self.session.flush()
