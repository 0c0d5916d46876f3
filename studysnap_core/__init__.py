"""studysnap-core: Pipeline for turning study documents into flashcards.

This package extracts normalized text from PDF, DOCX, and plain-text files,
condenses long material into study notes, and generates question/answer
flashcards through an OpenAI-compatible chat completions API.

    >>> from studysnap_core import StudySession
    >>> session = StudySession.from_settings()
    >>> extracted = await session.extract("lecture.pdf")
    >>> cards = await session.generate("Biology", extracted.text, False, 10)

Starting a new extraction or generation on a session cancels the one still
in flight.
"""

from studysnap_core.config import PipelineLimits, Settings, get_settings
from studysnap_core.errors import (
    DocumentDecodeError,
    DocumentNotFoundError,
    ExtractionError,
    GenerationAPIError,
    InvalidInputError,
    MissingCredentialsError,
    OperationCancelledError,
    ResponseParseError,
    StudySnapError,
    SummarizationFailedError,
    UnextractableContentError,
    UnsupportedFileTypeError,
)
from studysnap_core.extraction import DocumentExtractor, is_extension_supported
from studysnap_core.graph import build_generation_graph, summarize_large
from studysnap_core.model_adapters import BaseGenerationClient, OpenAIChatClient
from studysnap_core.pipeline import FlashcardPipeline
from studysnap_core.schemas import DocumentType, ExtractedText, Flashcard
from studysnap_core.session import StudySession
from studysnap_core.text import chunk_text, normalize_text
from studysnap_core.utils import CancellationToken

__version__ = "0.1.0"

__all__ = [
    "BaseGenerationClient",
    "CancellationToken",
    "DocumentDecodeError",
    "DocumentExtractor",
    "DocumentNotFoundError",
    "DocumentType",
    "ExtractedText",
    "ExtractionError",
    "Flashcard",
    "FlashcardPipeline",
    "GenerationAPIError",
    "InvalidInputError",
    "MissingCredentialsError",
    "OpenAIChatClient",
    "OperationCancelledError",
    "PipelineLimits",
    "ResponseParseError",
    "Settings",
    "StudySession",
    "StudySnapError",
    "SummarizationFailedError",
    "UnextractableContentError",
    "UnsupportedFileTypeError",
    "build_generation_graph",
    "chunk_text",
    "get_settings",
    "is_extension_supported",
    "normalize_text",
    "summarize_large",
]
