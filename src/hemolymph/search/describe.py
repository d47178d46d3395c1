"""Readable summaries of parsed queries, shown above the result list."""

from __future__ import annotations

from collections.abc import Sequence

from hemolymph.search.query import (
    CardField,
    Compare,
    ComparisonOp,
    Contains,
    Fuzzy,
    Has,
    HasKw,
    NestedMatch,
    Not,
    Relation,
    Restriction,
)


_OP_PHRASES = {
    ComparisonOp.GREATER_THAN: "greater than",
    ComparisonOp.GREATER_THAN_OR_EQUAL: "at least",
    ComparisonOp.LESS_THAN: "less than",
    ComparisonOp.LESS_THAN_OR_EQUAL: "at most",
    ComparisonOp.EQUAL: "",
    ComparisonOp.NOT_EQUAL: "other than",
}

_RELATION_PHRASES = {
    Relation.DEVOURS: "that devour",
}


def describe_restrictions(restrictions: Sequence[Restriction]) -> str:
    """Summarize restrictions as a phrase starting with "cards".

    Examples:
        >>> from hemolymph.search.parser import parse
        >>> describe_restrictions(parse("n:mantis c>=5"))
        'cards named "mantis" with cost at least 5'
        >>> describe_restrictions(parse(""))
        'all cards'
    """
    clauses = [_describe(restriction) for restriction in restrictions]
    clauses = [clause for clause in clauses if clause]
    if not clauses:
        return "all cards"
    return "cards " + " and ".join(clauses)


def _describe(restriction: Restriction) -> str:
    if isinstance(restriction, Fuzzy):
        return f'matching "{restriction.term}"' if restriction.term else ""
    if isinstance(restriction, Compare):
        label = f"{restriction.field.value} {_OP_PHRASES[restriction.comparison.op]}".rstrip()
        return f"with {label} {restriction.comparison.threshold}"
    if isinstance(restriction, Contains):
        if restriction.field is CardField.NAME:
            return f'named "{restriction.value}"'
        return f'with {restriction.field.value} "{restriction.value}"'
    if isinstance(restriction, Has):
        return f'that have kin "{restriction.value}"'
    if isinstance(restriction, HasKw):
        return f'that have keyword "{restriction.value}"'
    if isinstance(restriction, Not):
        return f"not {_describe(restriction.restriction)}"
    if isinstance(restriction, NestedMatch):
        return f"{_RELATION_PHRASES[restriction.relation]} ({describe_restrictions(restriction.restrictions)})"
    raise TypeError(f"Unexpected restriction: {restriction!r}")  # pragma: no cover - closed union
