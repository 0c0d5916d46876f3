"""Configuration for the study-material pipeline.

Runtime settings (credential, endpoint, model tiers, timeout) are loaded from
the environment. Pipeline limits are plain tunables with the defaults the
pipeline was designed around.
"""

from dataclasses import dataclass
from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_CARD_COUNT = 1
MAX_CARD_COUNT = 50


@dataclass(frozen=True)
class PipelineLimits:
    """Character budgets and bounds used across extraction and generation."""

    # Largest input sent to the API as-is; anything longer is summarized first
    direct_send_budget: int = 25_000

    # Largest document accepted; longer text is cut to this length
    total_accepted_budget: int = 250_000

    # Chunk size for map-reduce summarization, kept below direct_send_budget
    chunk_budget: int = 8_000

    # A PDF yielding less text than this is treated as having no text layer
    min_pdf_text_length: int = 50

    min_card_count: int = MIN_CARD_COUNT
    max_card_count: int = MAX_CARD_COUNT

    def __post_init__(self) -> None:
        if min(self.direct_send_budget, self.total_accepted_budget, self.chunk_budget) <= 0:
            raise ValueError("Character budgets must be positive")
        if self.chunk_budget >= self.direct_send_budget:
            raise ValueError(
                f"chunk_budget ({self.chunk_budget}) must be smaller than "
                f"direct_send_budget ({self.direct_send_budget})"
            )
        if self.min_pdf_text_length < 0:
            raise ValueError("min_pdf_text_length cannot be negative")
        if not 1 <= self.min_card_count <= self.max_card_count:
            raise ValueError("Card count bounds must satisfy 1 <= min <= max")


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("STUDYSNAP_OPENAI_API_KEY", "OPENAI_API_KEY"),
    )
    api_base_url: str = "https://api.openai.com/v1"

    # Model tiers selected by the advanced-tier flag
    basic_model: str = "gpt-4o-mini"
    advanced_model: str = "gpt-4o"

    request_timeout: float = Field(default=120.0, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="STUDYSNAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def has_api_key(self) -> bool:
        return bool(self.openai_api_key and self.openai_api_key.strip())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
