"""Prepare node: validate a generation request and decide its route."""

from collections.abc import Callable
from typing import Any

from studysnap_core.config import PipelineLimits
from studysnap_core.errors import InvalidInputError, MissingCredentialsError
from studysnap_core.utils.cancellation import ensure_token
from studysnap_core.utils.logging import get_logger

logger = get_logger(__name__)


def create_prepare_node(
    limits: PipelineLimits | None = None,
) -> Callable[[dict[str, Any]], Any]:
    """Create a prepare node bound to the given limits.

    Args:
        limits: Pipeline limits (count bounds and direct-send budget)

    Returns:
        Node function
    """
    resolved = limits or PipelineLimits()

    async def prepare_node(state: dict[str, Any]) -> dict[str, Any]:
        """Validate inputs before any API work is done.

        Args:
            state: Pipeline state with the raw request

        Returns:
            Updated state with trimmed text and the summarization decision
        """
        api_key = state.get("api_key") or ""
        if not api_key.strip():
            raise MissingCredentialsError(
                "API key is not configured. Please set your OpenAI API key."
            )

        text = (state.get("input_text") or "").strip()
        if not text:
            raise InvalidInputError("Input text cannot be empty.")

        requested_count = state.get("requested_count", 0)
        if not resolved.min_card_count <= requested_count <= resolved.max_card_count:
            raise InvalidInputError(
                f"Requested count must be between {resolved.min_card_count} "
                f"and {resolved.max_card_count}."
            )

        ensure_token(state.get("cancel_token")).raise_if_cancelled()

        needs_summary = len(text) > resolved.direct_send_budget
        if needs_summary:
            logger.info(
                f"Input is {len(text)} characters (> {resolved.direct_send_budget}), "
                "summarizing before generation"
            )

        return {
            **state,
            "input_text": text,
            "topic_text": text,
            "needs_summary": needs_summary,
            "current_step": "prepare",
            "progress": 10,
        }

    return prepare_node
