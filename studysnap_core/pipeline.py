"""Flashcard generation entry point."""

from collections.abc import Callable

from studysnap_core.config import PipelineLimits, Settings, get_settings
from studysnap_core.errors import OperationCancelledError
from studysnap_core.graph.build_generation_graph import build_generation_graph
from studysnap_core.graph.nodes.summarize import summarize_large
from studysnap_core.model_adapters.base import BaseGenerationClient
from studysnap_core.model_adapters.openai import OpenAIChatClient
from studysnap_core.schemas.cards import Flashcard
from studysnap_core.utils.cancellation import CancellationToken, ensure_token
from studysnap_core.utils.logging import get_logger, log_exceptions

logger = get_logger(__name__)


class FlashcardPipeline:
    """Turn study text into flashcards, summarizing it first when it is too long.

    The API credential is held here and passed explicitly into every client
    call, so any ``BaseGenerationClient`` can be plugged in.
    """

    def __init__(
        self,
        client: BaseGenerationClient,
        api_key: str,
        limits: PipelineLimits | None = None,
    ):
        self.client = client
        self.api_key = api_key
        self.limits = limits or PipelineLimits()
        self._graph = build_generation_graph(client, self.limits)

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        limits: PipelineLimits | None = None,
    ) -> "FlashcardPipeline":
        """Build a pipeline backed by the OpenAI client and configured credential."""
        resolved = settings or get_settings()
        return cls(
            OpenAIChatClient.from_settings(resolved),
            resolved.openai_api_key or "",
            limits=limits,
        )

    @log_exceptions(logger)
    async def generate(
        self,
        deck_label: str | None,
        input_text: str,
        use_advanced_tier: bool,
        requested_count: int,
        cancel_token: CancellationToken | None = None,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> list[Flashcard]:
        """Generate flashcards for a deck.

        Args:
            deck_label: Deck name used as the topic anchor, may be empty
            input_text: Study text
            use_advanced_tier: Select the advanced model tier
            requested_count: Number of cards to ask for
            cancel_token: Optional cancellation handle
            progress_callback: Called with (completed, total) per summarized chunk

        Returns:
            Generated flashcards; an empty list is a valid result

        Raises:
            MissingCredentialsError: If no API key is configured
            InvalidInputError: If the text is blank or the count is out of range
            SummarizationFailedError: If oversized input could not be summarized
            GenerationAPIError: If the API call fails
            ResponseParseError: If the API response is malformed
            OperationCancelledError: If cancelled
        """
        token = ensure_token(cancel_token)

        try:
            final_state = await self._graph.ainvoke(
                {
                    "deck_label": deck_label or "",
                    "input_text": input_text or "",
                    "use_advanced_tier": use_advanced_tier,
                    "requested_count": requested_count,
                    "api_key": self.api_key or "",
                    "cancel_token": token,
                    "progress_callback": progress_callback,
                }
            )
        except OperationCancelledError:
            logger.info("Flashcard generation cancelled")
            raise

        cards: list[Flashcard] = final_state.get("cards", [])
        if len(cards) != requested_count:
            logger.info(f"Requested {requested_count} cards, received {len(cards)}")
        return cards

    async def summarize_large(
        self,
        full_text: str,
        use_advanced_tier: bool,
        cancel_token: CancellationToken | None = None,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> str:
        """Condense long text with this pipeline's client, credential, and limits."""
        return await summarize_large(
            self.client,
            self.api_key,
            full_text,
            use_advanced_tier,
            limits=self.limits,
            cancel_token=cancel_token,
            progress_callback=progress_callback,
        )

    async def close(self) -> None:
        """Release the client's HTTP resources, if it holds any."""
        close = getattr(self.client, "close", None)
        if close is not None:
            await close()
