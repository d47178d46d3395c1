"""Per-query context used to correlate log lines from a single search."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from uuid import uuid4


query_context: ContextVar[dict | None] = ContextVar("query_context", default=None)


def generate_query_id() -> str:
    """Generate a 16-char hex query ID."""
    return uuid4().hex[:16]


def get_query_context() -> dict:
    """Get the current query context, creating a query_id when missing."""
    ctx = query_context.get()
    if ctx is None or not ctx.get("query_id"):
        ctx = {"query_id": generate_query_id()}
        query_context.set(ctx)
    return ctx


def set_query_context(query_id: str, **extra: object) -> None:
    """Set the query context for the current execution context."""
    query_context.set({"query_id": query_id, **extra})


@contextmanager
def bind_query(**extra: object) -> Generator[dict, None, None]:
    """Bind a fresh query_id for the duration of a block."""
    token = query_context.set({"query_id": generate_query_id(), **extra})
    try:
        yield query_context.get()
    finally:
        query_context.reset(token)
