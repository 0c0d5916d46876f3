"""Document and extracted-text schemas."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from studysnap_core.config import PipelineLimits


class DocumentType(str, Enum):
    """Document formats the extractor can decode."""

    PDF = "pdf"
    DOCX = "docx"
    TEXT = "txt"


class ExtractedText(BaseModel):
    """Normalized text pulled out of a document, with its origin."""

    text: str = Field(..., description="Normalized document text")
    source_name: str | None = Field(None, description="Source file name")
    document_type: DocumentType | None = Field(None, description="Source format")
    char_count: int = Field(0, ge=0, description="Number of characters in text")
    truncated: bool = Field(
        False, description="True if the text was cut to a character budget"
    )
    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        source_name: str | None = None,
        document_type: DocumentType | None = None,
    ) -> "ExtractedText":
        return cls(
            text=text,
            source_name=source_name,
            document_type=document_type,
            char_count=len(text),
        )

    @property
    def is_empty(self) -> bool:
        return not self.text

    def exceeds_direct_send(self, limits: PipelineLimits | None = None) -> bool:
        """Whether this text must be summarized before generation."""
        resolved = limits or PipelineLimits()
        return self.char_count > resolved.direct_send_budget

    def truncate(self, max_chars: int) -> "ExtractedText":
        """Return a copy cut to at most ``max_chars`` characters.

        The cut is a raw character slice and may land mid-word.
        """
        if self.char_count <= max_chars:
            return self
        sliced = self.text[:max_chars]
        return self.model_copy(
            update={"text": sliced, "char_count": len(sliced), "truncated": True}
        )
