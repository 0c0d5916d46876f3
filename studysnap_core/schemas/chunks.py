"""Chunk and summary schemas for map-reduce summarization."""

from pydantic import BaseModel, ConfigDict, Field


class TextChunk(BaseModel):
    """A contiguous slice of a document, in source order."""

    index: int = Field(..., ge=0, description="0-based position in the chunk sequence")
    text: str = Field(..., description="Chunk text, trimmed")
    model_config = ConfigDict(frozen=True)

    def __len__(self) -> int:
        return len(self.text)


class SummaryFragment(BaseModel):
    """Condensed notes for one chunk; text is None when summarization failed."""

    chunk_index: int = Field(..., ge=0, description="Index of the summarized chunk")
    text: str | None = Field(None, description="Summary text, None on failure")
    model_config = ConfigDict(frozen=True)

    @property
    def succeeded(self) -> bool:
        return bool(self.text)
