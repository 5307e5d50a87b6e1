"""Custom exceptions for FinFormatter."""

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from finformatter.core.paper import ProviderFailure


class FinFormatterError(Exception):
    """Base exception for FinFormatter."""


class ConfigurationError(FinFormatterError):
    """Configuration error."""


class ValidationError(FinFormatterError):
    """Data validation error."""


class InputTooShortError(ValidationError):
    """Paper text is shorter than the accepted minimum."""

    def __init__(self, length: int, min_length: int):
        self.length = length
        self.min_length = min_length
        super().__init__(
            f"Paper text is too short ({length} characters, minimum {min_length})"
        )


class APIError(FinFormatterError):
    """External API error."""


class ProviderError(APIError):
    """A single provider attempt failed.

    The fallback orchestrator recovers from every subclass by moving on to the
    next configured provider.
    """


class TransportError(ProviderError):
    """HTTP call to a provider did not succeed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class UnsupportedProviderError(ProviderError):
    """Provider tag is not one of the known providers."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Unsupported provider: {provider!r}")


class MalformedResponseError(ProviderError):
    """Provider returned text that is not a valid analysis result."""


class AnalysisError(FinFormatterError):
    """Paper analysis could not produce a result."""


class NoActiveProviderError(AnalysisError):
    """No provider is both enabled and configured with an API key."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "No AI provider is configured. Enable at least one provider "
            "and set its API key."
        )


class AllProvidersFailedError(AnalysisError):
    """Every enabled provider failed to return a usable result."""

    def __init__(self, failures: List["ProviderFailure"]):
        self.failures = list(failures)
        super().__init__(
            "None of the enabled AI providers returned a valid result. "
            "Check your API keys or try a different model."
        )


class ExportError(FinFormatterError):
    """Document export error."""


class DocumentImportError(FinFormatterError):
    """Input document could not be read."""
