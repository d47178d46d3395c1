"""Relevance ranking for filtered cards.

Each card gets a weighted sum of per-field similarity scores against the
fuzzy term. Similarity combines rapidfuzz's plain ratio (rewards close
whole-string matches) with its token-set ratio (rewards the term appearing
as a whole word), so "mantis" ranks "Mantis" over "Praying Mantis" and both
over "Ant".
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from functools import cmp_to_key
import math

from rapidfuzz import fuzz
from rapidfuzz.utils import default_process

from hemolymph.domain.model import Card


@dataclass(frozen=True)
class RankingWeights:
    """Per-field weights for the relevance score."""

    name: float = 2.0
    type: float = 1.8
    description: float = 1.6
    kin: float = 1.5
    keyword: float = 1.2


DEFAULT_WEIGHTS = RankingWeights()


def similarity(term: str, text: str) -> float:
    """Normalized 0.0-1.0 similarity between a search term and a field value.

    Examples:
        >>> similarity("mantis", "Mantis")
        1.0
        >>> similarity("", "Mantis")
        0.0
    """
    left = default_process(term)
    right = default_process(text)
    if not left or not right:
        return 0.0
    return (fuzz.ratio(left, right) + fuzz.token_set_ratio(left, right)) / 200.0


def best_similarity(term: str, values: Iterable[str]) -> float:
    """Highest similarity across a collection, 0.0 when it is empty."""
    return max((similarity(term, value) for value in values), default=0.0)


def score_card(card: Card, term: str, weights: RankingWeights = DEFAULT_WEIGHTS) -> float:
    """Weighted relevance of ``card`` for ``term``."""
    return (
        weights.name * similarity(term, card.name)
        + weights.type * similarity(term, card.type)
        + weights.description * similarity(term, card.description)
        + weights.kin * best_similarity(term, card.kins)
        + weights.keyword * best_similarity(term, (keyword.name for keyword in card.keywords))
    )


def _compare_scores(left: tuple[float, Card], right: tuple[float, Card]) -> int:
    # Descending; unorderable (NaN) pairs compare equal so the stable sort keeps their order.
    a, b = left[0], right[0]
    if math.isnan(a) or math.isnan(b) or a == b:
        return 0
    return -1 if a > b else 1


def rank(cards: Sequence[Card], term: str, weights: RankingWeights = DEFAULT_WEIGHTS) -> list[Card]:
    """Order cards by descending relevance; ties keep their input order."""
    scored = [(score_card(card, term, weights), card) for card in cards]
    scored.sort(key=cmp_to_key(_compare_scores))
    return [card for _, card in scored]
