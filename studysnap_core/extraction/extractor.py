"""Document extraction: file path in, normalized text out."""

import asyncio
from collections.abc import Iterator
from pathlib import Path

from studysnap_core.config import PipelineLimits
from studysnap_core.errors import (
    DocumentDecodeError,
    DocumentNotFoundError,
    InvalidInputError,
    UnextractableContentError,
    UnsupportedFileTypeError,
)
from studysnap_core.extraction.decoders import (
    SegmentDecoder,
    iter_docx_paragraphs,
    iter_pdf_pages,
)
from studysnap_core.schemas.document import DocumentType, ExtractedText
from studysnap_core.text.normalize import normalize_text
from studysnap_core.utils.cancellation import CancellationToken, ensure_token
from studysnap_core.utils.logging import get_logger

logger = get_logger(__name__)

SUPPORTED_EXTENSIONS: dict[str, DocumentType] = {
    ".pdf": DocumentType.PDF,
    ".docx": DocumentType.DOCX,
    ".txt": DocumentType.TEXT,
}

PAGE_SEPARATOR = "\n\n"
PARAGRAPH_SEPARATOR = "\n"


def is_extension_supported(extension: str) -> bool:
    """Check an extension such as ``".pdf"`` against the supported set."""
    return extension.lower() in SUPPORTED_EXTENSIONS


def detect_document_type(path: str | Path) -> DocumentType:
    """Map a file path to its document type.

    Raises:
        UnsupportedFileTypeError: If the extension is not supported
    """
    extension = Path(path).suffix.lower()
    if extension not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFileTypeError(extension)
    return SUPPORTED_EXTENSIONS[extension]


class DocumentExtractor:
    """Extract normalized text from PDF, DOCX, and plain-text files."""

    def __init__(
        self,
        limits: PipelineLimits | None = None,
        pdf_decoder: SegmentDecoder | None = None,
        docx_decoder: SegmentDecoder | None = None,
    ):
        """Initialize the extractor.

        Args:
            limits: Pipeline limits (for the scanned-PDF threshold)
            pdf_decoder: Page decoder, defaults to pdfplumber
            docx_decoder: Paragraph decoder, defaults to python-docx
        """
        self.limits = limits or PipelineLimits()
        self.pdf_decoder = pdf_decoder or iter_pdf_pages
        self.docx_decoder = docx_decoder or iter_docx_paragraphs

    async def extract_text(
        self,
        file_path: str | Path,
        cancel_token: CancellationToken | None = None,
    ) -> ExtractedText:
        """Extract and normalize the text of a document.

        Args:
            file_path: Path to a .pdf, .docx or .txt file
            cancel_token: Optional cancellation handle, polled between pages
                and paragraphs

        Returns:
            Normalized text with its origin metadata

        Raises:
            InvalidInputError: If the path is empty
            DocumentNotFoundError: If the file does not exist
            UnsupportedFileTypeError: If the extension is not supported
            UnextractableContentError: If a PDF has no usable text layer
            DocumentDecodeError: If the format decoder fails
            OperationCancelledError: If cancelled before completion
        """
        token = ensure_token(cancel_token)

        if not file_path or not str(file_path).strip():
            raise InvalidInputError("File path cannot be empty.")

        path = Path(file_path)
        if not path.is_file():
            raise DocumentNotFoundError(f"The specified file was not found: {path}")

        document_type = detect_document_type(path)
        token.raise_if_cancelled()

        logger.info(f"Extracting text from {path.name} ({document_type.value})")

        if document_type is DocumentType.PDF:
            raw_text = await self._extract_pdf(path, token)
        elif document_type is DocumentType.DOCX:
            raw_text = await self._extract_segments(
                self.docx_decoder, path, PARAGRAPH_SEPARATOR, token
            )
        else:
            raw_text = await self._extract_plain_text(path)

        token.raise_if_cancelled()

        text = normalize_text(raw_text)
        logger.info(f"Extracted {len(text)} characters from {path.name}")
        return ExtractedText.from_text(
            text, source_name=path.name, document_type=document_type
        )

    async def _extract_pdf(self, path: Path, token: CancellationToken) -> str:
        text = await self._extract_segments(
            self.pdf_decoder, path, PAGE_SEPARATOR, token
        )
        if len(text) < self.limits.min_pdf_text_length:
            raise UnextractableContentError(
                "This PDF appears to be scanned or contains no selectable text. "
                "OCR is not supported; please use a PDF with selectable text."
            )
        return text

    async def _extract_segments(
        self,
        decoder: SegmentDecoder,
        path: Path,
        separator: str,
        token: CancellationToken,
    ) -> str:
        """Run a segment decoder in a worker thread and join non-blank segments."""
        try:
            text = await asyncio.to_thread(
                _join_segments, decoder(path), separator, token
            )
        except Exception as e:
            raise DocumentDecodeError(f"Failed to read {path.name}: {e}") from e

        # The decode loop stops early on cancel; never hand back partial text
        token.raise_if_cancelled()
        return text

    async def _extract_plain_text(self, path: Path) -> str:
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8-sig")
        except UnicodeDecodeError as e:
            raise DocumentDecodeError(f"{path.name} is not valid UTF-8 text") from e


def _join_segments(
    segments: Iterator[str],
    separator: str,
    token: CancellationToken,
) -> str:
    """Collect non-blank segments, stopping as soon as cancellation is requested."""
    parts: list[str] = []
    try:
        for index, segment in enumerate(segments):
            if token.is_cancelled:
                return ""
            if segment and segment.strip():
                parts.append(segment.strip())
            else:
                logger.debug(f"Skipping blank segment {index}")
    finally:
        close = getattr(segments, "close", None)
        if close is not None:
            close()
    return separator.join(parts)
