"""Format decoders that yield raw text segments from a document.

Each decoder is a generator so the extractor can check for cancellation
between pages or paragraphs. Closing the generator early releases the
underlying file.
"""

from collections.abc import Callable, Iterator
from pathlib import Path

import pdfplumber
from docx import Document as DocxDocument
from docx.oxml.ns import qn
from docx.text.paragraph import Paragraph

from studysnap_core.utils.logging import get_logger

logger = get_logger(__name__)

SegmentDecoder = Callable[[Path], Iterator[str]]


def iter_pdf_pages(path: Path) -> Iterator[str]:
    """Yield the text layer of each PDF page, in page order.

    Args:
        path: Path to the PDF file

    Yields:
        Page text, empty for pages without a text layer
    """
    with pdfplumber.open(path) as pdf:
        logger.debug(f"Opened PDF {path.name} ({len(pdf.pages)} pages)")
        for page in pdf.pages:
            yield page.extract_text() or ""


def iter_docx_paragraphs(path: Path) -> Iterator[str]:
    """Yield the text of every paragraph in a DOCX body, in document order.

    Paragraphs nested in tables are included.
    """
    document = DocxDocument(str(path))
    for element in document.element.body.iter(qn("w:p")):
        yield Paragraph(element, document).text
