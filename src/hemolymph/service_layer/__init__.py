"""Service layer - query use cases over the card store."""

from .search_service import GENERIC_ERROR_MESSAGE, CardSearchService


__all__ = [
    "GENERIC_ERROR_MESSAGE",
    "CardSearchService",
]
