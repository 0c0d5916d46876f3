"""Whitespace normalization for extracted text."""

import re

# Any whitespace except newline
_HORIZONTAL_WHITESPACE = re.compile(r"[^\S\n]+")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def normalize_text(text: str) -> str:
    """Canonicalize whitespace while keeping paragraph structure.

    Line endings become ``\\n``, runs of other whitespace become one space,
    every line is trimmed, and blank-line runs collapse to a single blank
    line. The result is trimmed as a whole.

    Args:
        text: Raw text from a decoder or the user

    Returns:
        Normalized text, empty for empty or whitespace-only input
    """
    if not text or not text.strip():
        return ""

    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _HORIZONTAL_WHITESPACE.sub(" ", text)

    # Trim lines before collapsing so whitespace-only lines count as blank
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = _EXCESS_NEWLINES.sub("\n\n", text)

    return text.strip()
