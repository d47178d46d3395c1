"""Query parser: tokens to typed restrictions.

Bare words are collected into a single fuzzy term; every ``key:value`` pair
is resolved through the alias table into one restriction. A leading ``-`` on
a key negates that clause.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import logging
import re

from hemolymph.search.query import (
    COMPARISON_PREFIXES,
    FIELD_ALIASES,
    SUBQUERY_ALIASES,
    CardField,
    Compare,
    Comparison,
    ComparisonOp,
    Contains,
    Fuzzy,
    Has,
    HasKw,
    InvalidComparisonString,
    NestedMatch,
    Not,
    Param,
    Restriction,
    SuperParam,
    Token,
    UnknownParam,
    UnsupportedSubquery,
    Word,
)
from hemolymph.search.tokenizer import tokenize


logger = logging.getLogger(__name__)

_UNSIGNED = re.compile(r"\+?[0-9]+")

NEGATION_PREFIX = "-"


def parse(query: str, *, strict: bool = False) -> list[Restriction]:
    """Tokenize and parse a raw query string."""
    return parse_tokens(tokenize(query, strict=strict))


def parse_tokens(tokens: Iterable[Token]) -> list[Restriction]:
    """Convert tokens into restrictions.

    The returned list always ends with exactly one ``Fuzzy`` restriction
    holding the trimmed, space-joined bare words (possibly empty).

    Raises:
        UnknownParam: A key matched no alias.
        InvalidComparisonString: A numeric field got a malformed value.
        UnsupportedSubquery: A sub-query was bound to a plain field.
    """
    restrictions: list[Restriction] = []
    words: list[str] = []

    for token in tokens:
        if isinstance(token, Word):
            words.append(token.text)
        elif isinstance(token, Param):
            restrictions.append(_parse_param(token))
        elif isinstance(token, SuperParam):
            restrictions.append(_parse_super_param(token))
        else:  # pragma: no cover - closed union
            raise TypeError(f"Unexpected token: {token!r}")

    restrictions.append(Fuzzy(" ".join(words).strip()))
    logger.debug("Parsed %d restriction(s)", len(restrictions))
    return restrictions


def parse_comparison(key: str, value: str) -> Comparison:
    """Parse ``[op]<unsigned integer>``; a bare integer (optionally ``+``-signed) means equality.

    Examples:
        >>> parse_comparison("cost", "5")
        Comparison(op=<ComparisonOp.EQUAL: '='>, threshold=5)
        >>> parse_comparison("cost", ">=5").op
        <ComparisonOp.GREATER_THAN_OR_EQUAL: '>='>
    """
    if _UNSIGNED.fullmatch(value):
        return Comparison(ComparisonOp.EQUAL, int(value))

    for op in COMPARISON_PREFIXES:
        if value.startswith(op.value):
            remainder = value[len(op.value) :]
            if _UNSIGNED.fullmatch(remainder):
                return Comparison(op, int(remainder))
            break

    raise InvalidComparisonString(key, value)


def fuzzy_term(restrictions: Sequence[Restriction]) -> str:
    """Return the fuzzy term of a parsed query, or ``""`` if there is none."""
    for restriction in restrictions:
        if isinstance(restriction, Fuzzy):
            return restriction.term
    return ""


def _split_negation(key: str) -> tuple[str, bool]:
    if key.startswith(NEGATION_PREFIX):
        return key[len(NEGATION_PREFIX) :], True
    return key, False


def _parse_param(token: Param) -> Restriction:
    key, negated = _split_negation(token.key)
    field = FIELD_ALIASES.get(key)
    if field is None:
        raise UnknownParam(token.key)

    restriction: Restriction
    if field.is_numeric:
        restriction = Compare(field, parse_comparison(key, token.value))
    elif field is CardField.KINS:
        restriction = Has(field, token.value)
    elif field is CardField.KEYWORDS:
        restriction = HasKw(field, token.value)
    else:
        restriction = Contains(field, token.value)

    return Not(restriction) if negated else restriction


def _parse_super_param(token: SuperParam) -> Restriction:
    key, negated = _split_negation(token.key)
    relation = SUBQUERY_ALIASES.get(key)
    if relation is None:
        if key in FIELD_ALIASES:
            raise UnsupportedSubquery(token.key)
        raise UnknownParam(token.key)

    restriction = NestedMatch(relation, tuple(parse_tokens(token.tokens)))
    return Not(restriction) if negated else restriction
