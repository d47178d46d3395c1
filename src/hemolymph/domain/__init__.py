"""Domain layer - card records with no infrastructure dependencies.

This layer contains the immutable value objects the search engine reads:
- Card: the record being searched
- Keyword: a named ability with optional payload
- CardID: a partial card descriptor used inside keyword payloads
- CardListResult / ErrorResult: the query result envelope
"""

from hemolymph.domain.model import Card, CardID, CardIDData, Keyword, KeywordData, StringData
from hemolymph.domain.search import CardListResult, ErrorResult, QueryResult


__all__ = [
    "Card",
    "CardID",
    "CardIDData",
    "CardListResult",
    "ErrorResult",
    "Keyword",
    "KeywordData",
    "QueryResult",
    "StringData",
]
