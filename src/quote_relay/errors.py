from typing import Any


class ConfigError(RuntimeError):
    """Raised at startup when required configuration is missing."""


class GeminiAPIError(Exception):
    """Non-success HTTP response from the Gemini API."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"status_code={status_code} message={message}")
        self.status_code = status_code
        self.message = message


class QuoteError(Exception):
    """Error that maps directly onto an HTTP response of the quote endpoint."""

    status_code = 500

    def __init__(self, error: str, details: str | None = None, status_code: int | None = None) -> None:
        super().__init__(error)
        self.error = error
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def as_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class InvalidRequestError(QuoteError):
    status_code = 400


class BlockedRequestError(QuoteError):
    status_code = 400

    def __init__(self, block_reason: str, categories: list[str]) -> None:
        super().__init__(
            f"Request blocked by Gemini: {block_reason}",
            details=f"Categories: {', '.join(categories)}",
        )
        self.block_reason = block_reason
        self.categories = categories


class UpstreamError(QuoteError):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__("Failed to fetch quote from Gemini.", details=message, status_code=status_code)


class EmptyQuoteError(QuoteError):
    def __init__(self) -> None:
        super().__init__("Gemini returned an empty quote.")


class NoCandidateError(QuoteError):
    def __init__(self) -> None:
        super().__init__("Could not generate a suitable quote.")
