"""
Composable query specifications.

A ``Spec`` names a column by attribute and is rendered against whichever
model the repository serves, so the same spec objects work for every
repository::

    active_cheap = Spec.eq("is_active", True) & Spec.lt("retail_price", 10)
    await product_repo.find_all(active_cheap | Spec.ilike("code", "RING-%"))
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple

from sqlalchemy import and_, not_, or_
from sqlalchemy.sql.elements import ColumnElement

_OPERATORS: Dict[str, Callable[[Any, Any], ColumnElement]] = {
    "eq": lambda column, value: column == value,
    "ne": lambda column, value: column != value,
    "lt": lambda column, value: column < value,
    "le": lambda column, value: column <= value,
    "gt": lambda column, value: column > value,
    "ge": lambda column, value: column >= value,
    "ilike": lambda column, value: column.ilike(value),
    "in": lambda column, value: column.in_(list(value)),
    "is_null": lambda column, value: column.is_(None) if value else column.is_not(None),
}


def _column(model: Any, field: str):
    column = getattr(model, field, None)
    if column is None:
        raise AttributeError(f"{model.__name__} has no column '{field}'")
    return column


class Spec:
    """Base class; combine with ``&``, ``|`` and ``~``."""

    def to_clause(self, model: Any) -> ColumnElement:
        raise NotImplementedError

    def __and__(self, other: "Spec") -> "Spec":
        return AllOf((self, other))

    def __or__(self, other: "Spec") -> "Spec":
        return AnyOf((self, other))

    def __invert__(self) -> "Spec":
        return Not(self)

    @staticmethod
    def eq(field: str, value: Any) -> "Spec":
        return FieldSpec(field, "eq", value)

    @staticmethod
    def ne(field: str, value: Any) -> "Spec":
        return FieldSpec(field, "ne", value)

    @staticmethod
    def lt(field: str, value: Any) -> "Spec":
        return FieldSpec(field, "lt", value)

    @staticmethod
    def le(field: str, value: Any) -> "Spec":
        return FieldSpec(field, "le", value)

    @staticmethod
    def gt(field: str, value: Any) -> "Spec":
        return FieldSpec(field, "gt", value)

    @staticmethod
    def ge(field: str, value: Any) -> "Spec":
        return FieldSpec(field, "ge", value)

    @staticmethod
    def ilike(field: str, pattern: str) -> "Spec":
        return FieldSpec(field, "ilike", pattern)

    @staticmethod
    def in_(field: str, values) -> "Spec":
        return FieldSpec(field, "in", tuple(values))

    @staticmethod
    def compare_fields(field: str, op: str, other_field: str) -> "Spec":
        """Compare two columns of the same row, e.g. ``stock <= low_stock_alert``."""
        return FieldComparison(field, op, other_field)

    @staticmethod
    def is_null(field: str, null: bool = True) -> "Spec":
        return FieldSpec(field, "is_null", null)


@dataclass(frozen=True)
class FieldSpec(Spec):
    field: str
    op: str
    value: Any

    def to_clause(self, model: Any) -> ColumnElement:
        return _OPERATORS[self.op](_column(model, self.field), self.value)


@dataclass(frozen=True)
class FieldComparison(Spec):
    field: str
    op: str
    other_field: str

    def to_clause(self, model: Any) -> ColumnElement:
        return _OPERATORS[self.op](_column(model, self.field), _column(model, self.other_field))


@dataclass(frozen=True)
class AllOf(Spec):
    specs: Tuple[Spec, ...]

    def to_clause(self, model: Any) -> ColumnElement:
        return and_(*(spec.to_clause(model) for spec in self.specs))


@dataclass(frozen=True)
class AnyOf(Spec):
    specs: Tuple[Spec, ...]

    def to_clause(self, model: Any) -> ColumnElement:
        return or_(*(spec.to_clause(model) for spec in self.specs))


@dataclass(frozen=True)
class Not(Spec):
    spec: Spec

    def to_clause(self, model: Any) -> ColumnElement:
        return not_(self.spec.to_clause(model))
