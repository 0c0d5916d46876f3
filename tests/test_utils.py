"""Tests for logging and cancellation utilities."""

import logging

import pytest

from studysnap_core.errors import (
    DocumentNotFoundError,
    InvalidInputError,
    MissingCredentialsError,
    OperationCancelledError,
    StudySnapError,
)
from studysnap_core.utils import CancellationToken, ensure_token, get_logger, log_exceptions


class TestCancellationToken:
    """Tests for CancellationToken."""

    def test_cancel(self) -> None:
        """Test that cancel flips the flag and raise_if_cancelled raises."""
        token = CancellationToken()
        token.raise_if_cancelled()
        assert not token.is_cancelled

        token.cancel()
        token.cancel()

        assert token.is_cancelled
        with pytest.raises(OperationCancelledError):
            token.raise_if_cancelled()

    def test_ensure_token(self) -> None:
        """Test that None becomes a fresh token and tokens pass through."""
        token = CancellationToken()

        assert ensure_token(token) is token
        assert not ensure_token(None).is_cancelled


class TestErrorHierarchy:
    """Tests for the exception hierarchy."""

    def test_builtin_compatibility(self) -> None:
        """Test that pipeline errors also match their builtin counterparts."""
        assert issubclass(InvalidInputError, ValueError)
        assert issubclass(MissingCredentialsError, InvalidInputError)
        assert issubclass(DocumentNotFoundError, FileNotFoundError)
        assert issubclass(OperationCancelledError, StudySnapError)


class TestLogExceptions:
    """Tests for the log_exceptions decorator."""

    def test_sync_exception_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that sync exceptions are logged and re-raised."""
        logger = get_logger("tests.sync")
        logger.propagate = True

        @log_exceptions(logger)
        def boom() -> None:
            raise ValueError("bad value")

        with caplog.at_level(logging.ERROR, logger="tests.sync"):
            with pytest.raises(ValueError):
                boom()

        assert "Exception in boom: bad value" in caplog.text

    @pytest.mark.asyncio
    async def test_async_cancellation_not_logged(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that cancellation passes through without an error log."""
        logger = get_logger("tests.async")
        logger.propagate = True

        @log_exceptions(logger)
        async def cancelled() -> None:
            raise OperationCancelledError()

        with caplog.at_level(logging.ERROR, logger="tests.async"):
            with pytest.raises(OperationCancelledError):
                await cancelled()

        assert caplog.text == ""
