"""Write cards node: generate flashcards from the prepared text."""

from collections.abc import Callable
from typing import Any

from studysnap_core.model_adapters.base import BaseGenerationClient
from studysnap_core.schemas.cards import GenerationRequest
from studysnap_core.utils.cancellation import ensure_token
from studysnap_core.utils.logging import get_logger

logger = get_logger(__name__)


def apply_deck_label(deck_label: str | None, text: str) -> str:
    """Prefix the text with the deck topic to anchor the generated cards."""
    if deck_label and deck_label.strip():
        return f"Topic: {deck_label.strip()}\n\n{text}"
    return text


def create_write_cards_node(
    client: BaseGenerationClient,
) -> Callable[[dict[str, Any]], Any]:
    """Create a write cards node with the given generation client.

    Args:
        client: Generation client

    Returns:
        Node function
    """

    async def write_cards_node(state: dict[str, Any]) -> dict[str, Any]:
        """Generate flashcards from the topic text.

        Args:
            state: Pipeline state with topic text

        Returns:
            Updated state with cards
        """
        token = ensure_token(state.get("cancel_token"))
        token.raise_if_cancelled()

        request = GenerationRequest(
            topic_text=apply_deck_label(state.get("deck_label"), state["topic_text"]),
            use_advanced_tier=state.get("use_advanced_tier", False),
            requested_count=state["requested_count"],
        )

        cards = await client.generate_flashcards(
            state["api_key"],
            request.topic_text,
            request.use_advanced_tier,
            request.requested_count,
            cancel_token=token,
        )

        if not cards:
            logger.warning("Generation returned no flashcards")

        return {
            **state,
            "cards": cards,
            "card_count": len(cards),
            "current_step": "write_cards",
            "progress": 100,
        }

    return write_cards_node
