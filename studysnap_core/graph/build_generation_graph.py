"""Build the flashcard generation graph."""

from typing import Annotated, Any, Callable, TypedDict

from langgraph.graph import END, StateGraph

from studysnap_core.config import PipelineLimits
from studysnap_core.model_adapters.base import BaseGenerationClient
from studysnap_core.schemas.cards import Flashcard
from studysnap_core.utils.cancellation import CancellationToken
from studysnap_core.utils.logging import get_logger

logger = get_logger(__name__)


def _keep_last_str(existing: str, incoming: str) -> str:
    """Keep the most recent non-empty step name."""
    return incoming or existing


def _keep_max_int(existing: int, incoming: int) -> int:
    """Progress only moves forward."""
    return max(existing or 0, incoming or 0)


class GenerationState(TypedDict, total=False):
    """State passed through the generation graph."""

    # Input
    deck_label: str
    input_text: str
    use_advanced_tier: bool
    requested_count: int

    # Runtime handles, never persisted
    api_key: str
    cancel_token: CancellationToken
    progress_callback: Callable[[int, int], None] | None

    # Processing state
    needs_summary: bool
    topic_text: str

    # Output
    cards: list[Flashcard]
    card_count: int

    # Metadata
    current_step: Annotated[str, _keep_last_str]
    progress: Annotated[int, _keep_max_int]


def _route_after_prepare(state: dict[str, Any]) -> str:
    return "summarize" if state.get("needs_summary") else "write_cards"


def build_generation_graph(
    client: BaseGenerationClient,
    limits: PipelineLimits | None = None,
) -> Any:
    """Build the generation pipeline graph.

    Input within the direct-send budget goes straight to card writing; larger
    input is summarized first.

    Args:
        client: Generation client for API calls
        limits: Optional pipeline limits

    Returns:
        Compiled StateGraph ready for invocation
    """
    from studysnap_core.graph.nodes import prepare, summarize, write_cards

    resolved = limits or PipelineLimits()
    logger.debug(
        f"Building generation graph (direct_send_budget={resolved.direct_send_budget}, "
        f"chunk_budget={resolved.chunk_budget})"
    )

    graph = StateGraph(GenerationState)

    graph.add_node("prepare", prepare.create_prepare_node(resolved))
    graph.add_node("summarize", summarize.create_summarize_node(client, resolved))
    graph.add_node("write_cards", write_cards.create_write_cards_node(client))

    graph.set_entry_point("prepare")
    graph.add_conditional_edges(
        "prepare",
        _route_after_prepare,
        {"summarize": "summarize", "write_cards": "write_cards"},
    )
    graph.add_edge("summarize", "write_cards")
    graph.add_edge("write_cards", END)

    return graph.compile()
