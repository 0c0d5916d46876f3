"""Flashcard schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Flashcard(BaseModel):
    """A generated question/answer pair."""

    front: str = Field(..., description="Question/prompt side")
    back: str = Field(..., description="Answer side")

    @field_validator("front", "back")
    @classmethod
    def _require_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Flashcard sides cannot be empty")
        return value

    def __hash__(self) -> int:
        return hash((self.front, self.back))


class GenerationRequest(BaseModel):
    """One flashcard request: the text to study, the model tier, and the card count."""

    topic_text: str = Field(..., description="Text the cards are generated from")
    use_advanced_tier: bool = Field(False, description="Use the advanced model tier")
    requested_count: int = Field(..., description="Number of cards to ask for")
    model_config = ConfigDict(frozen=True)
