"""End-to-end query execution: tokenize, parse, filter, rank."""

from __future__ import annotations

from collections.abc import Sequence
import logging

from hemolymph.domain.model import Card
from hemolymph.search.evaluator import filter_cards
from hemolymph.search.parser import fuzzy_term, parse
from hemolymph.search.query import Restriction
from hemolymph.search.ranker import DEFAULT_WEIGHTS, RankingWeights, rank


logger = logging.getLogger(__name__)


def execute(
    restrictions: Sequence[Restriction],
    cards: Sequence[Card],
    weights: RankingWeights = DEFAULT_WEIGHTS,
) -> list[Card]:
    """Filter and rank ``cards`` for already-parsed restrictions."""
    survivors = filter_cards(cards, restrictions)
    ranked = rank(survivors, fuzzy_term(restrictions), weights)
    logger.debug("Query matched %d of %d card(s)", len(ranked), len(cards))
    return ranked


def run_query(
    query: str,
    cards: Sequence[Card],
    *,
    weights: RankingWeights | None = None,
    strict: bool = False,
) -> list[Card]:
    """Run a raw query against a card collection.

    ``cards`` may be the collection itself or a store snapshot; it is only read.

    Raises:
        QueryError: The query could not be tokenized or parsed.
    """
    restrictions = parse(query, strict=strict)
    return execute(restrictions, cards, weights or DEFAULT_WEIGHTS)
