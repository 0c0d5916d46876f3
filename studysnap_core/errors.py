"""Exception hierarchy for the study-material pipeline.

Every failure the pipeline raises on purpose derives from ``StudySnapError``
so callers can separate pipeline conditions from programming errors:

- ``InvalidInputError``: bad arguments, unsupported file types, out-of-range
  counts, missing credentials. Never retried.
- ``DocumentNotFoundError``: the file to extract does not exist.
- ``UnextractableContentError``: the file decodes but holds no usable text
  (for example a scanned PDF without a text layer).
- ``OperationCancelledError``: the caller aborted the operation. Not a failure.
- ``GenerationAPIError``: the generation endpoint answered with a non-success
  status or could not be reached.
- ``ResponseParseError``: the endpoint answered, but the payload was malformed.
- ``SummarizationFailedError``: oversized input could not be condensed at all.
"""


class StudySnapError(Exception):
    """Base class for all pipeline errors."""

    pass


class InvalidInputError(StudySnapError, ValueError):
    """Raised when an argument fails validation."""

    pass


class MissingCredentialsError(InvalidInputError):
    """Raised when no API credential is configured."""

    pass


class UnsupportedFileTypeError(InvalidInputError):
    """Raised when a document's extension is not one we can decode."""

    def __init__(self, extension: str):
        super().__init__(
            f"Unsupported file type: {extension or '(none)'}. "
            "Please upload PDF, DOCX, or TXT files."
        )
        self.extension = extension


class DocumentNotFoundError(StudySnapError, FileNotFoundError):
    """Raised when the document path does not exist."""

    pass


class ExtractionError(StudySnapError):
    """Base class for failures while decoding a document."""

    pass


class UnextractableContentError(ExtractionError):
    """Raised when a document has no extractable text layer."""

    pass


class DocumentDecodeError(ExtractionError):
    """Raised when a format decoder fails on a document."""

    pass


class OperationCancelledError(StudySnapError):
    """Raised when an operation is aborted through its cancellation token."""

    def __init__(self, message: str = "Operation was cancelled"):
        super().__init__(message)


class GenerationAPIError(StudySnapError):
    """Raised when the generation endpoint returns a non-success response."""

    def __init__(self, status_code: int | None, body: str, message: str | None = None):
        self.status_code = status_code
        self.body = body
        if message is None:
            status = status_code if status_code is not None else "no response"
            message = f"Generation API error: {status} - {body[:500]}"
        super().__init__(message)


class ResponseParseError(StudySnapError):
    """Raised when an API response cannot be parsed."""

    def __init__(self, message: str, content: str = ""):
        super().__init__(message)
        self.content = content


class SummarizationFailedError(StudySnapError):
    """Raised when oversized input could not be summarized."""

    pass
