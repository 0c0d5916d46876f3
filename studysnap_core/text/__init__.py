"""Text normalization and chunking."""

from studysnap_core.text.chunker import chunk_document, chunk_text
from studysnap_core.text.normalize import normalize_text

__all__ = ["chunk_document", "chunk_text", "normalize_text"]
