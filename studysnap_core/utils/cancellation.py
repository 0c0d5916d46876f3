"""Cooperative cancellation handle shared by long-running operations."""

import threading

from studysnap_core.errors import OperationCancelledError


class CancellationToken:
    """Signal polled between iterations of long-running loops.

    The flag is a ``threading.Event`` so that decode loops running in worker
    threads observe a cancel issued from the event loop.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation. Idempotent."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise OperationCancelledError if cancellation was requested."""
        if self._event.is_set():
            raise OperationCancelledError()


def ensure_token(token: CancellationToken | None) -> CancellationToken:
    """Return the given token, or a fresh one that is never cancelled."""
    return token if token is not None else CancellationToken()
