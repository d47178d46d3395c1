"""Centralized configuration for hemolymph-search using Pydantic Settings."""

from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hemolymph.search.ranker import RankingWeights


class Settings(BaseSettings):
    """Strictly typed configuration loaded from environment variables.

    Values are validated at startup; every field can be overridden with the
    upper-case environment variable of the same name (e.g. ``NAME_WEIGHT=3``).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Data
    cards_file: Path | None = Field(default=None, description="JSON file holding the card collection")

    # Query behaviour
    strict_syntax: bool = Field(
        default=False,
        description="Reject queries with unterminated quotes or sub-queries instead of reading to end of input",
    )
    max_results: int = Field(default=0, ge=0, description="Maximum cards returned per query (0 = unlimited)")

    # Ranking weights
    name_weight: float = Field(default=2.0, ge=0.0, description="Weight of name similarity")
    type_weight: float = Field(default=1.8, ge=0.0, description="Weight of type similarity")
    description_weight: float = Field(default=1.6, ge=0.0, description="Weight of description similarity")
    kin_weight: float = Field(default=1.5, ge=0.0, description="Weight of the best kin similarity")
    keyword_weight: float = Field(default=1.2, ge=0.0, description="Weight of the best keyword similarity")

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    # Security
    mask_error_details: bool = Field(
        default=True, description="Report a generic message instead of the parser's error text"
    )

    @model_validator(mode="after")
    def _check_weights(self) -> "Settings":
        weights = (self.name_weight, self.type_weight, self.description_weight, self.kin_weight, self.keyword_weight)
        if not any(weights):
            raise ValueError("At least one ranking weight must be greater than zero")
        return self

    def ranking_weights(self) -> RankingWeights:
        """Build the ranker's weight table from the configured values."""
        return RankingWeights(
            name=self.name_weight,
            type=self.type_weight,
            description=self.description_weight,
            kin=self.kin_weight,
            keyword=self.keyword_weight,
        )
