"""Typed index-lookup descriptors.

A `Lookup` names a mapped column, a comparison operator and a value. Services
build lookups instead of passing free-form filter callables, so every query
the engines issue is visible as data and checked against the mapped column's
type.
"""
from __future__ import annotations

import operator
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

from sqlalchemy import ColumnElement
from sqlalchemy.orm import InstrumentedAttribute

T = TypeVar("T")

LookupOp = Literal["eq", "ne", "lt", "lte", "gt", "gte"]

_OPERATORS: dict[str, Callable[[Any, Any], Any]] = {
    "eq": operator.eq,
    "ne": operator.ne,
    "lt": operator.lt,
    "lte": operator.le,
    "gt": operator.gt,
    "gte": operator.ge,
}


@dataclass(frozen=True)
class Lookup(Generic[T]):
    """A single `field <op> value` predicate against an indexed column."""

    field: InstrumentedAttribute[T]
    op: LookupOp
    value: T

    def clause(self) -> ColumnElement[bool]:
        """Return the SQL expression for this lookup."""
        if self.value is None and self.op in ("eq", "ne"):
            return self.field.is_(None) if self.op == "eq" else self.field.is_not(None)
        return _OPERATORS[self.op](self.field, self.value)


def eq(field: InstrumentedAttribute[T], value: T) -> Lookup[T]:
    return Lookup(field, "eq", value)


__all__ = ["Lookup", "LookupOp", "eq"]
