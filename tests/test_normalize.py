"""Tests for whitespace normalization."""

import pytest

from studysnap_core.text.normalize import normalize_text


class TestNormalizeText:
    """Tests for normalize_text."""

    def test_empty_and_blank_input(self) -> None:
        """Test that empty or whitespace-only input normalizes to empty."""
        assert normalize_text("") == ""
        assert normalize_text("  \n\t \r\n ") == ""

    def test_line_endings_unified(self) -> None:
        """Test that CRLF and CR become LF."""
        assert normalize_text("one\r\ntwo\rthree") == "one\ntwo\nthree"

    def test_horizontal_whitespace_collapsed(self) -> None:
        """Test that tabs and space runs collapse to one space."""
        assert normalize_text("a \t  b  c") == "a b c"

    def test_lines_trimmed(self) -> None:
        """Test that every line loses leading and trailing spaces."""
        assert normalize_text("  first  \n   second ") == "first\nsecond"

    def test_blank_line_runs_collapse(self) -> None:
        """Test that three or more newlines become one blank line."""
        assert normalize_text("para one\n\n\n\n\npara two") == "para one\n\npara two"

    def test_whitespace_only_lines_count_as_blank(self) -> None:
        """Test that lines holding only spaces collapse with their neighbors."""
        assert normalize_text("a\n  \n \t \n\nb") == "a\n\nb"

    @pytest.mark.parametrize(
        "raw",
        [
            "plain text",
            "  lead and trail  ",
            "a\r\n\r\n\r\n\r\nb",
            "x \n \n \n y",
            "tabs\t\tand  spaces \n\n\n\tindented",
            "\n\n\nonly newlines around\n\n\n",
        ],
    )
    def test_idempotent(self, raw: str) -> None:
        """Test that normalizing twice equals normalizing once."""
        once = normalize_text(raw)
        assert normalize_text(once) == once
