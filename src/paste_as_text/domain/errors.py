from __future__ import annotations


class PasteAsTextError(Exception):
    """Base class for every error raised by the extraction core."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidConfiguration(PasteAsTextError, ValueError):
    """A backend configuration was rejected at configure time."""


class StoreError(PasteAsTextError):
    """The credential store failed (permission denial, corruption, backend error)."""


class ExtractError(PasteAsTextError):
    """Base class for failures of a single extraction call."""

    retryable = False


class NotConfigured(ExtractError):
    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message or "AI service is not configured. Please add your API key in settings."
        )


class InvalidImageFormat(ExtractError):
    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "Invalid image format. Please try a different image.")


class RateLimited(ExtractError):
    retryable = True

    def __init__(self, retry_after: float | None = None) -> None:
        super().__init__("Rate limit exceeded. Please try again later.")
        self.retry_after = retry_after


class RemoteError(ExtractError):
    def __init__(
        self, message: str, status_code: int | None = None, body: str | None = None
    ) -> None:
        super().__init__(f"API error: {message}")
        self.status_code = status_code
        self.body = body


class ParseError(ExtractError):
    def __init__(self, message: str) -> None:
        super().__init__(f"Error parsing response: {message}")


class TransportError(ExtractError):
    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Network error: {cause}")
        self.cause = cause


class Cancelled(ExtractError):
    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "Extraction was cancelled.")
