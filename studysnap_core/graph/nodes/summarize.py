"""Summarize node: map-reduce condensation of text too large to send directly."""

from collections.abc import Callable
from typing import Any

from studysnap_core.config import PipelineLimits
from studysnap_core.errors import (
    MissingCredentialsError,
    OperationCancelledError,
    SummarizationFailedError,
)
from studysnap_core.model_adapters.base import BaseGenerationClient
from studysnap_core.schemas.chunks import SummaryFragment, TextChunk
from studysnap_core.text.chunker import chunk_document
from studysnap_core.utils.cancellation import CancellationToken, ensure_token
from studysnap_core.utils.logging import get_logger

logger = get_logger(__name__)

# Placed between per-chunk summaries in the combined notes
SUMMARY_DIVIDER = "\n\n---\n\n"

ProgressCallback = Callable[[int, int], None]


async def _summarize_chunk(
    client: BaseGenerationClient,
    api_key: str,
    chunk: TextChunk,
    use_advanced_tier: bool,
    token: CancellationToken,
) -> SummaryFragment:
    """Summarize one chunk, recording a failure instead of raising it."""
    try:
        notes = await client.summarize_to_notes(
            api_key, chunk.text, use_advanced_tier, cancel_token=token
        )
    except OperationCancelledError:
        raise
    except Exception as e:
        logger.warning(f"Skipping chunk {chunk.index + 1}: summarization failed: {e}")
        return SummaryFragment(chunk_index=chunk.index)

    if not notes:
        logger.warning(f"Skipping chunk {chunk.index + 1}: empty summary")
        return SummaryFragment(chunk_index=chunk.index)
    return SummaryFragment(chunk_index=chunk.index, text=notes)


async def _condense_once(
    client: BaseGenerationClient,
    api_key: str,
    combined: str,
    use_advanced_tier: bool,
    limit: int,
    token: CancellationToken,
) -> str:
    """Run a single extra pass over the combined notes, truncating on failure."""
    logger.info(
        f"Combined summary is {len(combined)} characters, running one condense pass"
    )
    try:
        condensed = await client.summarize_to_notes(
            api_key, combined, use_advanced_tier, cancel_token=token
        )
    except OperationCancelledError:
        raise
    except Exception as e:
        logger.warning(f"Condense pass failed ({e}); truncating to {limit} characters")
        return combined[:limit]

    if not condensed:
        logger.warning(f"Condense pass returned nothing; truncating to {limit} characters")
        return combined[:limit]
    return condensed


async def summarize_large(
    client: BaseGenerationClient,
    api_key: str,
    full_text: str,
    use_advanced_tier: bool,
    limits: PipelineLimits | None = None,
    cancel_token: CancellationToken | None = None,
    progress_callback: ProgressCallback | None = None,
) -> str:
    """Condense arbitrarily long text into notes that fit the direct-send budget.

    The text is chunked, each chunk is summarized in order, and the surviving
    summaries are joined with a divider. A chunk whose summarization fails is
    skipped. If the joined notes are still too long, they get exactly one more
    summarization pass, falling back to truncation if that pass fails.

    Args:
        client: Generation client
        api_key: API credential
        full_text: Text to condense
        use_advanced_tier: Select the advanced model tier
        limits: Pipeline limits (chunk and direct-send budgets)
        cancel_token: Optional cancellation handle, checked before every chunk
        progress_callback: Called with (completed, total) after each chunk

    Returns:
        Condensed notes, or an empty string if every chunk failed

    Raises:
        MissingCredentialsError: If the API key is blank
        OperationCancelledError: If cancelled between chunks
    """
    if not api_key or not api_key.strip():
        raise MissingCredentialsError("API key is required.")

    resolved = limits or PipelineLimits()
    token = ensure_token(cancel_token)

    chunks = chunk_document(full_text, resolved.chunk_budget)
    if not chunks:
        return ""
    if len(chunks) == 1 and len(chunks[0]) <= resolved.direct_send_budget:
        return chunks[0].text

    logger.info(f"Summarizing {len(full_text)} characters in {len(chunks)} chunks")

    fragments: list[SummaryFragment] = []
    for chunk in chunks:
        token.raise_if_cancelled()
        fragments.append(
            await _summarize_chunk(client, api_key, chunk, use_advanced_tier, token)
        )
        if progress_callback is not None:
            progress_callback(len(fragments), len(chunks))

    summaries = [fragment.text for fragment in fragments if fragment.succeeded]
    if not summaries:
        logger.error(f"All {len(chunks)} chunks failed to summarize")
        return ""

    if len(summaries) < len(chunks):
        logger.info(f"Summarized {len(summaries)} of {len(chunks)} chunks")

    combined = SUMMARY_DIVIDER.join(summaries)
    if len(combined) <= resolved.direct_send_budget:
        return combined

    token.raise_if_cancelled()
    return await _condense_once(
        client,
        api_key,
        combined,
        use_advanced_tier,
        resolved.direct_send_budget,
        token,
    )


def create_summarize_node(
    client: BaseGenerationClient,
    limits: PipelineLimits | None = None,
) -> Callable[[dict[str, Any]], Any]:
    """Create a summarize node with the given generation client.

    Args:
        client: Generation client
        limits: Pipeline limits

    Returns:
        Node function
    """
    resolved = limits or PipelineLimits()

    async def summarize_node(state: dict[str, Any]) -> dict[str, Any]:
        """Replace oversized input with condensed notes.

        Args:
            state: Pipeline state with input text

        Returns:
            Updated state with the condensed topic text
        """
        summary = await summarize_large(
            client,
            state.get("api_key", ""),
            state.get("input_text", ""),
            state.get("use_advanced_tier", False),
            limits=resolved,
            cancel_token=state.get("cancel_token"),
            progress_callback=state.get("progress_callback"),
        )
        if not summary:
            raise SummarizationFailedError(
                "Could not summarize the document. "
                "Please try again or use a smaller document."
            )

        return {
            **state,
            "topic_text": summary,
            "current_step": "summarize",
            "progress": 60,
        }

    return summarize_node
