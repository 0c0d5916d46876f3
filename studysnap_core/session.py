"""Single-flight entry point: one active extraction or generation at a time."""

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TypeVar

from studysnap_core.config import Settings
from studysnap_core.errors import OperationCancelledError
from studysnap_core.extraction.extractor import DocumentExtractor
from studysnap_core.pipeline import FlashcardPipeline
from studysnap_core.schemas.cards import Flashcard
from studysnap_core.schemas.document import ExtractedText
from studysnap_core.utils.cancellation import CancellationToken
from studysnap_core.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class StudySession:
    """Run extraction and generation with last-request-wins cancellation.

    Starting a new operation cancels whatever is still running. The superseded
    caller sees ``OperationCancelledError``.
    """

    def __init__(
        self,
        pipeline: FlashcardPipeline,
        extractor: DocumentExtractor | None = None,
    ):
        self.pipeline = pipeline
        self.extractor = extractor or DocumentExtractor(pipeline.limits)
        self._token: CancellationToken | None = None
        self._task: asyncio.Future | None = None

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "StudySession":
        return cls(FlashcardPipeline.from_settings(settings))

    @property
    def is_busy(self) -> bool:
        return self._task is not None and not self._task.done()

    def cancel(self) -> None:
        """Cancel the in-flight operation, if any."""
        if self._token is not None:
            self._token.cancel()
        if self._task is not None and not self._task.done():
            logger.info("Cancelling in-flight operation")
            self._task.cancel()

    async def _run(self, operation: Callable[[CancellationToken], Awaitable[T]]) -> T:
        self.cancel()

        token = CancellationToken()
        task = asyncio.ensure_future(operation(token))
        self._token = token
        self._task = task

        try:
            return await task
        except asyncio.CancelledError:
            if token.is_cancelled:
                raise OperationCancelledError() from None
            raise
        finally:
            if self._task is task:
                self._task = None
                self._token = None

    async def extract(
        self,
        path: str | Path,
        truncate_oversized: bool = True,
    ) -> ExtractedText:
        """Extract a document's text, cancelling any in-flight operation.

        Args:
            path: Document path
            truncate_oversized: Cut text above the total accepted budget

        Returns:
            Extracted text, marked ``truncated`` if it was cut
        """
        extracted = await self._run(
            lambda token: self.extractor.extract_text(path, cancel_token=token)
        )

        budget = self.pipeline.limits.total_accepted_budget
        if truncate_oversized and extracted.char_count > budget:
            logger.warning(
                f"{extracted.source_name} has {extracted.char_count} characters, "
                f"truncating to {budget}"
            )
            extracted = extracted.truncate(budget)
        return extracted

    async def generate(
        self,
        deck_label: str | None,
        input_text: str,
        use_advanced_tier: bool,
        requested_count: int,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> list[Flashcard]:
        """Generate flashcards, cancelling any in-flight operation."""
        return await self._run(
            lambda token: self.pipeline.generate(
                deck_label,
                input_text,
                use_advanced_tier,
                requested_count,
                cancel_token=token,
                progress_callback=progress_callback,
            )
        )

    async def close(self) -> None:
        self.cancel()
        await self.pipeline.close()
