"""
Card query language package.

This package provides the query engine:
- query: token, comparison, field selector and restriction types
- tokenizer: raw query text to tokens
- parser: tokens to restrictions via the field alias table
- evaluator: restriction predicates over cards
- ranker: weighted fuzzy relevance ordering
- describe: readable query summaries
- pipeline: the whole chain in one call
"""

from hemolymph.search.parser import fuzzy_term, parse, parse_tokens
from hemolymph.search.pipeline import execute, run_query
from hemolymph.search.query import (
    InvalidComparisonString,
    QueryError,
    UnknownParam,
    UnsupportedSubquery,
    UnterminatedInput,
)
from hemolymph.search.ranker import RankingWeights
from hemolymph.search.tokenizer import tokenize


__all__ = [
    "InvalidComparisonString",
    "QueryError",
    "RankingWeights",
    "UnknownParam",
    "UnsupportedSubquery",
    "UnterminatedInput",
    "execute",
    "fuzzy_term",
    "parse",
    "parse_tokens",
    "run_query",
    "tokenize",
]
