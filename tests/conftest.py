"""Shared fixtures for studysnap-core tests."""

from collections.abc import Callable
from typing import Any

import pytest

from studysnap_core.config import PipelineLimits
from studysnap_core.model_adapters.base import BaseGenerationClient
from studysnap_core.schemas.cards import Flashcard
from studysnap_core.utils.cancellation import CancellationToken


def _default_summary(text: str) -> str:
    return f"notes {text.split()[0]}"


class FakeGenerationClient(BaseGenerationClient):
    """Deterministic client for orchestration tests."""

    def __init__(
        self,
        cards: list[Flashcard] | None = None,
        summarize: Callable[[str], str] | None = None,
    ):
        self.cards = (
            cards if cards is not None else [Flashcard(front="What is ATP?", back="Energy")]
        )
        self.summarize = summarize or _default_summary
        self.summary_inputs: list[str] = []
        self.flashcard_requests: list[dict[str, Any]] = []

    async def generate_flashcards(
        self,
        api_key: str,
        topic_text: str,
        use_advanced_tier: bool,
        requested_count: int,
        cancel_token: CancellationToken | None = None,
    ) -> list[Flashcard]:
        """Record the request and return the canned cards."""
        self.flashcard_requests.append(
            {
                "api_key": api_key,
                "topic_text": topic_text,
                "use_advanced_tier": use_advanced_tier,
                "requested_count": requested_count,
            }
        )
        return list(self.cards)

    async def summarize_to_notes(
        self,
        api_key: str,
        chunk_text: str,
        use_advanced_tier: bool,
        cancel_token: CancellationToken | None = None,
    ) -> str:
        """Record the chunk and summarize it with the configured function."""
        self.summary_inputs.append(chunk_text)
        return self.summarize(chunk_text)


@pytest.fixture
def small_limits() -> PipelineLimits:
    """Limits small enough to exercise chunking with short strings."""
    return PipelineLimits(
        direct_send_budget=100,
        total_accepted_budget=1_000,
        chunk_budget=50,
    )


@pytest.fixture
def five_sections() -> str:
    """Five paragraphs that each land in their own 50-character chunk."""
    return "\n\n".join(f"Section{i} " + "x" * 30 for i in range(1, 6))


@pytest.fixture
def fake_client() -> FakeGenerationClient:
    return FakeGenerationClient()
