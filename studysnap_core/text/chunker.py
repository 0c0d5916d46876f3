"""Split text into size-bounded chunks along paragraph and sentence boundaries.

Chunking is greedy and deterministic. Paragraphs (separated by a blank line)
are packed into a chunk until the next one would overflow the budget. A
paragraph that is too large on its own is packed sentence by sentence, and a
sentence that is still too large is cut into fixed-length slices.
"""

import re
from collections.abc import Callable

from studysnap_core.schemas.chunks import TextChunk

PARAGRAPH_SEPARATOR = "\n\n"
SENTENCE_SEPARATOR = " "

# A sentence ends at ., ! or ? followed by whitespace
_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")


def chunk_text(text: str, max_chars_per_chunk: int) -> list[str]:
    """Split text into ordered chunks of at most ``max_chars_per_chunk``.

    Args:
        text: Text to split, ideally already normalized
        max_chars_per_chunk: Character budget per chunk

    Returns:
        Chunks in source order. Empty for blank input; ``[text]`` unchanged
        when the text already fits.
    """
    if max_chars_per_chunk <= 0:
        raise ValueError("max_chars_per_chunk must be positive")

    if not text or not text.strip():
        return []

    if len(text) <= max_chars_per_chunk:
        return [text]

    paragraphs = [p for p in text.split(PARAGRAPH_SEPARATOR) if p.strip()]
    return _pack(
        paragraphs,
        max_chars_per_chunk,
        separator=PARAGRAPH_SEPARATOR,
        split_oversized=_split_paragraph,
    )


def chunk_document(text: str, max_chars_per_chunk: int) -> list[TextChunk]:
    """Chunk text and tag each chunk with its ordinal position."""
    return [
        TextChunk(index=index, text=chunk)
        for index, chunk in enumerate(chunk_text(text, max_chars_per_chunk))
    ]


def _split_paragraph(paragraph: str, max_chars: int) -> list[str]:
    """Pack an oversized paragraph sentence by sentence."""
    sentences = [s for s in _SENTENCE_BOUNDARY.split(paragraph) if s]
    return _pack(
        sentences,
        max_chars,
        separator=SENTENCE_SEPARATOR,
        split_oversized=_hard_split,
    )


def _hard_split(sentence: str, max_chars: int) -> list[str]:
    """Cut a sentence into fixed-length slices, the last resort."""
    slices = (
        sentence[start : start + max_chars]
        for start in range(0, len(sentence), max_chars)
    )
    return [piece.strip() for piece in slices if piece.strip()]


def _pack(
    units: list[str],
    max_chars: int,
    separator: str,
    split_oversized: Callable[[str, int], list[str]],
) -> list[str]:
    """Greedily accumulate units into chunks, flushing before an overflow.

    Args:
        units: Paragraphs or sentences in source order
        max_chars: Character budget per chunk
        separator: Text placed between units inside one chunk
        split_oversized: Fallback splitter for a unit larger than the budget

    Returns:
        Trimmed chunks in source order
    """
    chunks: list[str] = []
    buffer: list[str] = []
    buffer_len = 0

    def flush() -> None:
        nonlocal buffer, buffer_len
        if buffer:
            chunk = separator.join(buffer).strip()
            if chunk:
                chunks.append(chunk)
        buffer = []
        buffer_len = 0

    for unit in units:
        if buffer_len + len(unit) + len(separator) > max_chars:
            flush()
            if len(unit) > max_chars:
                chunks.extend(split_oversized(unit, max_chars))
                continue
            buffer = [unit]
            buffer_len = len(unit)
        else:
            buffer_len += len(unit) + (len(separator) if buffer else 0)
            buffer.append(unit)

    flush()
    return chunks
