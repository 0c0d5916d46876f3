"""Data schemas for the pipeline.

This module exports the data schemas passed between pipeline stages:
extracted document text, chunks and their summaries, and flashcards.
"""

from studysnap_core.schemas.cards import Flashcard, GenerationRequest
from studysnap_core.schemas.chunks import SummaryFragment, TextChunk
from studysnap_core.schemas.document import DocumentType, ExtractedText

__all__ = [
    # Documents
    "DocumentType",
    "ExtractedText",
    # Chunks
    "SummaryFragment",
    "TextChunk",
    # Cards
    "Flashcard",
    "GenerationRequest",
]
