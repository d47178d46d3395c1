"""Search service orchestration layer.

Runs the query pipeline against the card store and wraps the outcome in the
result envelope the presentation layer consumes.
"""

import logging

from hemolymph.adapters.card_store import AbstractCardRepository
from hemolymph.config import Settings
from hemolymph.domain.model import Card
from hemolymph.domain.search import CardListResult, ErrorResult, QueryResult
from hemolymph.observability.context import bind_query
from hemolymph.observability.metrics import QUERY_COUNT, QUERY_ERRORS, QUERY_LATENCY, QUERY_RESULTS, track_latency
from hemolymph.search.describe import describe_restrictions
from hemolymph.search.parser import parse
from hemolymph.search.pipeline import execute
from hemolymph.search.query import QueryError


logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Invalid query"


class CardSearchService:
    """High-level search API for the host application.

    The service borrows the repository's current snapshot per call; it never
    writes to the collection.
    """

    def __init__(self, repository: AbstractCardRepository, settings: Settings | None = None):
        """Initialize search service with dependencies.

        Args:
            repository: Card collection to search (required)
            settings: Query and ranking configuration; defaults are loaded from the environment
        """
        self.repository = repository
        self.settings = settings or Settings()
        self.weights = self.settings.ranking_weights()

    def search(self, raw_query: str, *, limit: int | None = None) -> QueryResult:
        """Run a query and return matches or a reportable error.

        Args:
            raw_query: Query text as typed by the user
            limit: Maximum cards to return; falls back to ``settings.max_results`` (0 = unlimited)

        Returns:
            CardListResult on success, ErrorResult when the query is malformed

        Raises:
            ValueError: ``limit`` is negative
        """
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")

        with bind_query(query=raw_query), track_latency(QUERY_LATENCY):
            try:
                restrictions = parse(raw_query, strict=self.settings.strict_syntax)
            except QueryError as exc:
                logger.warning("Rejected query %r: %s", raw_query, exc)
                QUERY_COUNT.labels(status="error").inc()
                QUERY_ERRORS.labels(error_type=type(exc).__name__).inc()
                message = GENERIC_ERROR_MESSAGE if self.settings.mask_error_details else str(exc)
                return ErrorResult(message=message)

            cards = execute(restrictions, self.repository.snapshot(), self.weights)
            limit = self.settings.max_results if limit is None else limit
            if limit:
                cards = cards[:limit]

            QUERY_COUNT.labels(status="ok").inc()
            QUERY_RESULTS.observe(len(cards))
            logger.debug("Query %r returned %d card(s)", raw_query, len(cards))
            return CardListResult(query_text=describe_restrictions(restrictions), content=cards)

    def get_card(self, card_id: str) -> Card | None:
        """Look up a single card for the detail view."""
        card = self.repository.get(card_id)
        if card is None:
            logger.debug("Card %r not found", card_id)
        return card
