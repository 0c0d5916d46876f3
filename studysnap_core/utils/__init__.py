"""Utility functions."""

from studysnap_core.utils.cancellation import CancellationToken, ensure_token
from studysnap_core.utils.logging import get_logger, log_exceptions

__all__ = [
    "CancellationToken",
    "ensure_token",
    "get_logger",
    "log_exceptions",
]
