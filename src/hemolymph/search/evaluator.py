"""Restriction evaluation over a card collection.

Every restriction is a pure predicate over a card; a card survives when all
restrictions hold. Nothing here mutates cards or keeps state across cards.
"""

from __future__ import annotations

from collections.abc import Sequence

from hemolymph.domain.model import Card, Keyword
from hemolymph.search.query import (
    CardField,
    Compare,
    Contains,
    Fuzzy,
    Has,
    HasKw,
    NestedMatch,
    Not,
    Relation,
    Restriction,
)


DEVOUR_KEYWORDS = frozenset({"devour", "devours"})


def select_field(card: Card, field: CardField) -> int | str | tuple[str, ...] | tuple[Keyword, ...]:
    """Read the value a field selector names."""
    return getattr(card, field.value)


def filter_cards(cards: Sequence[Card], restrictions: Sequence[Restriction]) -> list[Card]:
    """Return the cards satisfying every restriction, in collection order."""
    return [card for card in cards if all(matches(card, restriction, cards) for restriction in restrictions)]


def matches(card: Card, restriction: Restriction, cards: Sequence[Card] = ()) -> bool:
    """Evaluate one restriction against one card.

    Args:
        card: Card under test.
        restriction: Parsed restriction.
        cards: The collection being searched; only compound restrictions
            (``NestedMatch``) look at it to resolve related cards.
    """
    if isinstance(restriction, Fuzzy):
        return fuzzy_match(card, restriction.term)

    if isinstance(restriction, Compare):
        return restriction.comparison.matches(select_field(card, restriction.field))

    if isinstance(restriction, Contains):
        return restriction.value.lower() in select_field(card, restriction.field).lower()

    if isinstance(restriction, Has):
        return any(restriction.value in item for item in select_field(card, restriction.field))

    if isinstance(restriction, HasKw):
        return any(restriction.value in keyword.name for keyword in select_field(card, restriction.field))

    if isinstance(restriction, Not):
        return not matches(card, restriction.restriction, cards)

    if isinstance(restriction, NestedMatch):
        return any(
            all(matches(related, inner, cards) for inner in restriction.restrictions)
            for related in related_cards(card, restriction.relation, cards)
        )

    raise TypeError(f"Unexpected restriction: {restriction!r}")  # pragma: no cover - closed union


def fuzzy_match(card: Card, term: str) -> bool:
    """Case-insensitive substring match across name, type, description, kins and keywords."""
    needle = term.lower()
    if needle in card.name.lower() or needle in card.type.lower() or needle in card.description.lower():
        return True
    if any(needle in kin.lower() for kin in card.kins):
        return True
    return any(needle in keyword.name.lower() for keyword in card.keywords)


def related_cards(card: Card, relation: Relation, cards: Sequence[Card]) -> list[Card]:
    """Resolve the cards of the collection that ``card`` is related to."""
    if relation is Relation.DEVOURS:
        references = [
            reference
            for keyword in card.keywords
            if keyword.name.lower() in DEVOUR_KEYWORDS and (reference := keyword.card_reference()) is not None
        ]
        return [other for other in cards if any(reference.is_satisfied_by(other) for reference in references)]
    raise ValueError(f"Unsupported relation: {relation!r}")  # pragma: no cover - closed enum
