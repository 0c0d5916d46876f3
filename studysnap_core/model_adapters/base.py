"""Base generation client interface."""

from abc import ABC, abstractmethod

from studysnap_core.schemas.cards import Flashcard
from studysnap_core.utils.cancellation import CancellationToken


class BaseGenerationClient(ABC):
    """Abstract base class for generative text API clients.

    Clients hold no per-request state. The API credential is passed into
    every call.
    """

    @abstractmethod
    async def generate_flashcards(
        self,
        api_key: str,
        topic_text: str,
        use_advanced_tier: bool,
        requested_count: int,
        cancel_token: CancellationToken | None = None,
    ) -> list[Flashcard]:
        """Generate question/answer flashcards from text.

        Args:
            api_key: API credential
            topic_text: Text to build the cards from
            use_advanced_tier: Select the advanced model tier
            requested_count: Number of cards to ask for
            cancel_token: Optional cancellation handle

        Returns:
            Valid flashcards; the count may differ from requested_count
        """
        pass

    @abstractmethod
    async def summarize_to_notes(
        self,
        api_key: str,
        chunk_text: str,
        use_advanced_tier: bool,
        cancel_token: CancellationToken | None = None,
    ) -> str:
        """Condense text into organized study notes.

        Args:
            api_key: API credential
            chunk_text: Text to condense
            use_advanced_tier: Select the advanced model tier
            cancel_token: Optional cancellation handle

        Returns:
            Trimmed notes text, empty for empty input
        """
        pass
