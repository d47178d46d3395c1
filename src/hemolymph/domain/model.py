"""Domain model - card records and keyword payloads.

Cards are value objects supplied whole by the data layer:
- Immutable (frozen=True) so a collection can be shared between query runs
- Collections are tuples so cards stay hashable
- Validation happens once, at the data boundary
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CardID(BaseModel):
    """Partial card descriptor used by keywords to point at other cards.

    Every field is optional; unset fields place no constraint on the card.
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    name: str | None = None
    type: str | None = None
    description: str | None = None
    cost: int | None = Field(default=None, ge=0)
    health: int | None = Field(default=None, ge=0)
    defense: int | None = Field(default=None, ge=0)
    power: int | None = Field(default=None, ge=0)
    kins: tuple[str, ...] | None = None

    def is_satisfied_by(self, card: "Card") -> bool:
        """Check whether every field set on this descriptor agrees with the card."""
        for attr in ("id", "name", "type", "description"):
            expected = getattr(self, attr)
            if expected is not None and expected.lower() != getattr(card, attr).lower():
                return False
        for attr in ("cost", "health", "defense", "power"):
            expected = getattr(self, attr)
            if expected is not None and expected != getattr(card, attr):
                return False
        if self.kins is not None and not set(self.kins).issubset(card.kins):
            return False
        return True


class StringData(BaseModel):
    """Free-form text attached to a keyword."""

    model_config = ConfigDict(frozen=True)

    type: Literal["String"] = "String"
    data: str


class CardIDData(BaseModel):
    """Card reference attached to a keyword (e.g. what a card devours)."""

    model_config = ConfigDict(frozen=True)

    type: Literal["CardID"] = "CardID"
    data: CardID


KeywordData = Annotated[StringData | CardIDData, Field(discriminator="type")]


class Keyword(BaseModel):
    """Named card ability. Identity is the name; data is descriptive."""

    model_config = ConfigDict(frozen=True)

    name: str
    data: KeywordData | None = None

    @field_validator("data", mode="before")
    @classmethod
    def _wrap_plain_string(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"type": "String", "data": value}
        return value

    def card_reference(self) -> CardID | None:
        """Return the referenced card descriptor, if the keyword carries one."""
        if isinstance(self.data, CardIDData):
            return self.data.data
        return None


class Card(BaseModel):
    """A single card record."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: str
    description: str
    cost: int = Field(ge=0)
    health: int = Field(ge=0)
    defense: int = Field(ge=0)
    power: int = Field(ge=0)
    img: tuple[str, ...] = ()
    kins: tuple[str, ...] = ()
    keywords: tuple[Keyword, ...] = ()
