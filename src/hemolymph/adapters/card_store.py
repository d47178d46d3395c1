"""In-memory card store and JSON card loading.

The host owns a ``CardStore``: it populates it once, replaces the whole
collection on refresh, and hands snapshots to the query engine. Snapshots are
immutable tuples, so a query run never holds the lock while it evaluates.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
import logging
from pathlib import Path
import threading

import orjson
from pydantic import TypeAdapter, ValidationError

from hemolymph.domain.model import Card
from hemolymph.observability.metrics import STORE_CARD_COUNT


logger = logging.getLogger(__name__)

_CARD_LIST = TypeAdapter(list[Card])


class CardLoadError(RuntimeError):
    """Raised when card data cannot be converted into card records."""


def parse_cards(payload: bytes | str) -> list[Card]:
    """Decode a JSON array of card objects.

    Raises:
        CardLoadError: The payload is not valid JSON or does not match the card schema.
    """
    try:
        raw = orjson.loads(payload)
    except orjson.JSONDecodeError as exc:
        raise CardLoadError(f"Malformed card JSON: {exc}") from exc

    try:
        return _CARD_LIST.validate_python(raw)
    except ValidationError as exc:
        raise CardLoadError(f"Card data failed validation ({exc.error_count()} error(s)): {exc}") from exc


def load_cards(path: Path) -> list[Card]:
    """Read and decode a JSON card file."""
    try:
        payload = path.read_bytes()
    except OSError as exc:
        raise CardLoadError(f"Cannot read card file {path}: {exc}") from exc
    cards = parse_cards(payload)
    logger.info("Loaded %d card(s) from %s", len(cards), path)
    return cards


class AbstractCardRepository(ABC):
    """Read access to the card collection."""

    @abstractmethod
    def snapshot(self) -> tuple[Card, ...]:
        """Return the current collection as an immutable sequence."""
        raise NotImplementedError

    @abstractmethod
    def get(self, card_id: str) -> Card | None:
        """Get a card by its identity."""
        raise NotImplementedError


class CardStore(AbstractCardRepository):
    """Thread-safe, replace-on-refresh card collection."""

    def __init__(self, cards: Iterable[Card] = ()) -> None:
        self._lock = threading.RLock()
        self._cards: tuple[Card, ...] = ()
        self._by_id: dict[str, Card] = {}
        self.replace(cards)

    def replace(self, cards: Iterable[Card]) -> None:
        """Swap in a new collection atomically."""
        cards = tuple(cards)
        by_id = {card.id: card for card in cards}
        if len(by_id) != len(cards):
            logger.warning("Card collection contains %d duplicate id(s)", len(cards) - len(by_id))
        with self._lock:
            self._cards = cards
            self._by_id = by_id
        STORE_CARD_COUNT.set(len(cards))
        logger.debug("Card store now holds %d card(s)", len(cards))

    def load_file(self, path: Path) -> int:
        """Replace the collection with the contents of a JSON card file."""
        cards = load_cards(path)
        self.replace(cards)
        return len(cards)

    def snapshot(self) -> tuple[Card, ...]:
        with self._lock:
            return self._cards

    def get(self, card_id: str) -> Card | None:
        with self._lock:
            return self._by_id.get(card_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._cards)
