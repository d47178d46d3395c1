"""Query data types: tokens, comparisons, field selectors and restrictions.

Everything here is an immutable value built per query and dropped once the
results are ranked. Field selectors are a closed enum so restrictions stay
hashable, comparable and readable in logs.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import operator
from typing import Union


class QueryError(ValueError):
    """Base error for query syntax failures. Any of these aborts the whole query."""


class InvalidComparisonString(QueryError):
    """Raised when a numeric field is given something other than ``[op]<integer>``."""

    def __init__(self, key: str, value: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid comparison for '{key}': {value!r}")


class UnknownParam(QueryError):
    """Raised when a ``key:value`` key matches no alias."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Unknown parameter: {key!r}")


class UnsupportedSubquery(QueryError):
    """Raised when a parenthesized sub-query is bound to a key that does not take one."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Parameter {key!r} does not accept a sub-query")


class UnterminatedInput(QueryError):
    """Raised in strict mode when a quote or sub-query runs to the end of input."""

    def __init__(self, kind: str, key: str) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"Unterminated {kind} for parameter {key!r}")


# Tokens


@dataclass(slots=True, frozen=True)
class Word:
    """A bare word; contributes to the fuzzy term."""

    text: str


@dataclass(slots=True, frozen=True)
class Param:
    """A single ``key:value`` assertion."""

    key: str
    value: str


@dataclass(slots=True, frozen=True)
class SuperParam:
    """A ``key:(...)`` clause holding a nested token sequence."""

    key: str
    tokens: tuple[Token, ...]


Token = Union[Word, Param, SuperParam]


# Comparisons


class ComparisonOp(str, Enum):
    """Numeric relations supported by comparison restrictions."""

    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="
    EQUAL = "="
    NOT_EQUAL = "!="

    def apply(self, left: int, right: int) -> bool:
        return _OPERATORS[self](left, right)


_OPERATORS = {
    ComparisonOp.GREATER_THAN: operator.gt,
    ComparisonOp.GREATER_THAN_OR_EQUAL: operator.ge,
    ComparisonOp.LESS_THAN: operator.lt,
    ComparisonOp.LESS_THAN_OR_EQUAL: operator.le,
    ComparisonOp.EQUAL: operator.eq,
    ComparisonOp.NOT_EQUAL: operator.ne,
}

# Two-character prefixes must be tried before their one-character counterparts.
COMPARISON_PREFIXES: tuple[ComparisonOp, ...] = (
    ComparisonOp.GREATER_THAN_OR_EQUAL,
    ComparisonOp.LESS_THAN_OR_EQUAL,
    ComparisonOp.GREATER_THAN,
    ComparisonOp.LESS_THAN,
    ComparisonOp.EQUAL,
    ComparisonOp.NOT_EQUAL,
)


@dataclass(slots=True, frozen=True)
class Comparison:
    """A relation plus its non-negative threshold."""

    op: ComparisonOp
    threshold: int

    def matches(self, value: int) -> bool:
        return self.op.apply(value, self.threshold)

    def __str__(self) -> str:
        return f"{self.op.value}{self.threshold}"


# Field selectors


class CardField(str, Enum):
    """Selectable card fields. ``select_field`` in the evaluator does the access."""

    COST = "cost"
    HEALTH = "health"
    DEFENSE = "defense"
    POWER = "power"
    NAME = "name"
    TYPE = "type"
    DESCRIPTION = "description"
    KINS = "kins"
    KEYWORDS = "keywords"

    @property
    def is_numeric(self) -> bool:
        return self in NUMERIC_FIELDS


NUMERIC_FIELDS = frozenset({CardField.COST, CardField.HEALTH, CardField.DEFENSE, CardField.POWER})


class Relation(str, Enum):
    """Card-to-card relations usable in compound sub-queries."""

    DEVOURS = "devours"


FIELD_ALIASES: dict[str, CardField] = {
    "cost": CardField.COST,
    "c": CardField.COST,
    "health": CardField.HEALTH,
    "h": CardField.HEALTH,
    "hp": CardField.HEALTH,
    "power": CardField.POWER,
    "strength": CardField.POWER,
    "damage": CardField.POWER,
    "p": CardField.POWER,
    "dmg": CardField.POWER,
    "str": CardField.POWER,
    "defense": CardField.DEFENSE,
    "def": CardField.DEFENSE,
    "d": CardField.DEFENSE,
    "name": CardField.NAME,
    "n": CardField.NAME,
    "type": CardField.TYPE,
    "t": CardField.TYPE,
    "kin": CardField.KINS,
    "k": CardField.KINS,
    "keyword": CardField.KEYWORDS,
    "kw": CardField.KEYWORDS,
}

SUBQUERY_ALIASES: dict[str, Relation] = {
    "devour": Relation.DEVOURS,
    "devours": Relation.DEVOURS,
    "dev": Relation.DEVOURS,
}

NUMERIC_ALIASES = frozenset(alias for alias, field in FIELD_ALIASES.items() if field.is_numeric)


# Restrictions


@dataclass(slots=True, frozen=True)
class Fuzzy:
    """Loose multi-field substring match; the term also drives ranking."""

    term: str


@dataclass(slots=True, frozen=True)
class Compare:
    field: CardField
    comparison: Comparison


@dataclass(slots=True, frozen=True)
class Contains:
    field: CardField
    value: str


@dataclass(slots=True, frozen=True)
class Has:
    field: CardField
    value: str


@dataclass(slots=True, frozen=True)
class HasKw:
    field: CardField
    value: str


@dataclass(slots=True, frozen=True)
class Not:
    """Inverts a single clause."""

    restriction: Restriction


@dataclass(slots=True, frozen=True)
class NestedMatch:
    """Matches cards related to at least one card satisfying ``restrictions``."""

    relation: Relation
    restrictions: tuple[Restriction, ...]


Restriction = Union[Fuzzy, Compare, Contains, Has, HasKw, Not, NestedMatch]
