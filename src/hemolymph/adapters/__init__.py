"""Adapters - card data boundary and storage."""

from hemolymph.adapters.card_store import AbstractCardRepository, CardLoadError, CardStore, load_cards, parse_cards


__all__ = [
    "AbstractCardRepository",
    "CardLoadError",
    "CardStore",
    "load_cards",
    "parse_cards",
]
