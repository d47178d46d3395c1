"""Domain models for query results.

The envelope is discriminated by ``type`` so a consumer can tell a result
list from a failure without inspecting the payload:

- ``{"type": "CardList", "query_text": ..., "content": [...]}``
- ``{"type": "Error", "message": ...}``
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from hemolymph.domain.model import Card


class CardListResult(BaseModel):
    """Ordered matches plus a readable summary of the query."""

    model_config = ConfigDict(frozen=True)

    type: Literal["CardList"] = "CardList"
    query_text: str
    content: list[Card] = Field(default_factory=list)


class ErrorResult(BaseModel):
    """A query that failed to tokenize or parse."""

    model_config = ConfigDict(frozen=True)

    type: Literal["Error"] = "Error"
    message: str


QueryResult = Annotated[CardListResult | ErrorResult, Field(discriminator="type")]
