"""Document text extraction for PDF, DOCX, and plain-text files."""

from studysnap_core.extraction.decoders import iter_docx_paragraphs, iter_pdf_pages
from studysnap_core.extraction.extractor import (
    SUPPORTED_EXTENSIONS,
    DocumentExtractor,
    detect_document_type,
    is_extension_supported,
)

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "DocumentExtractor",
    "detect_document_type",
    "is_extension_supported",
    "iter_docx_paragraphs",
    "iter_pdf_pages",
]
