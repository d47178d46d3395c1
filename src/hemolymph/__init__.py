"""Hemolymph card search: query language, filtering and relevance ranking."""

from hemolymph.domain.model import Card, CardID, Keyword
from hemolymph.search import QueryError, RankingWeights, parse, run_query, tokenize


__all__ = [
    "Card",
    "CardID",
    "Keyword",
    "QueryError",
    "RankingWeights",
    "parse",
    "run_query",
    "tokenize",
]
