"""Tests for paragraph and sentence chunking."""

import pytest

from studysnap_core.text.chunker import chunk_document, chunk_text


class TestChunkText:
    """Tests for chunk_text."""

    def test_empty_input(self) -> None:
        """Test that empty and blank input produce no chunks."""
        assert chunk_text("", 100) == []
        assert chunk_text("   \n\n  ", 100) == []

    def test_small_input_passthrough(self) -> None:
        """Test that text within budget is returned unchanged."""
        text = "A short paragraph.\n\nAnother one."
        assert chunk_text(text, len(text)) == [text]

    def test_non_positive_budget_rejected(self) -> None:
        """Test that a zero budget is a programming error."""
        with pytest.raises(ValueError):
            chunk_text("text", 0)

    def test_paragraphs_packed_greedily(self) -> None:
        """Test that paragraphs share a chunk until the next would overflow."""
        paragraphs = ["a" * 20, "b" * 20, "c" * 20]
        text = "\n\n".join(paragraphs)

        chunks = chunk_text(text, 45)

        assert chunks == ["a" * 20 + "\n\n" + "b" * 20, "c" * 20]

    def test_oversized_paragraph_split_by_sentence(self) -> None:
        """Test that a long paragraph is packed sentence by sentence."""
        sentences = [f"Sentence number {i} is here." for i in range(10)]
        text = " ".join(sentences)

        chunks = chunk_text(text, 60)

        assert len(chunks) > 1
        assert all(len(chunk) <= 60 for chunk in chunks)
        assert " ".join(chunks) == text

    def test_oversized_sentence_hard_split(self) -> None:
        """Test that a sentence longer than the budget is cut into slices."""
        text = "x" * 250

        chunks = chunk_text(text, 100)

        assert chunks == ["x" * 100, "x" * 100, "x" * 50]

    def test_budget_respected(self) -> None:
        """Test that mixed content never exceeds the budget."""
        text = "\n\n".join(
            [
                "Short intro.",
                "Medium paragraph with a few words. " * 3,
                "A very long paragraph. " * 20,
                "y" * 130,
                "Closing remark.",
            ]
        )

        for chunk in chunk_text(text, 80):
            assert len(chunk) <= 80

    def test_order_and_coverage(self) -> None:
        """Test that chunks preserve source order and lose no words."""
        paragraphs = [f"Paragraph {i}. " + "word " * 12 for i in range(8)]
        text = "\n\n".join(p.strip() for p in paragraphs)

        chunks = chunk_text(text, 150)

        assert " ".join(chunks).split() == text.split()
        positions = [text.index(chunk.split("\n\n")[0]) for chunk in chunks]
        assert positions == sorted(positions)


class TestChunkDocument:
    """Tests for chunk_document."""

    def test_chunks_are_indexed(self) -> None:
        """Test that chunks carry 0-based ordinals."""
        text = "\n\n".join(["a" * 30, "b" * 30, "c" * 30])

        chunks = chunk_document(text, 40)

        assert [chunk.index for chunk in chunks] == [0, 1, 2]
        assert [chunk.text[0] for chunk in chunks] == ["a", "b", "c"]
        assert len(chunks[0]) == 30
