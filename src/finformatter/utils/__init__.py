"""Utility modules for FinFormatter."""

from finformatter.utils.exceptions import (
    AllProvidersFailedError,
    AnalysisError,
    APIError,
    ConfigurationError,
    DocumentImportError,
    ExportError,
    FinFormatterError,
    InputTooShortError,
    MalformedResponseError,
    NoActiveProviderError,
    ProviderError,
    TransportError,
    UnsupportedProviderError,
    ValidationError,
)
from finformatter.utils.logging import get_logger, setup_logging
from finformatter.utils.text_utils import (
    content_to_lines,
    content_to_text,
    mask_secret,
    sanitize_filename,
    split_italic_runs,
    strip_html_tags,
    truncate_text,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    # Exceptions
    "FinFormatterError",
    "ConfigurationError",
    "ValidationError",
    "InputTooShortError",
    "APIError",
    "ProviderError",
    "TransportError",
    "UnsupportedProviderError",
    "MalformedResponseError",
    "AnalysisError",
    "NoActiveProviderError",
    "AllProvidersFailedError",
    "ExportError",
    "DocumentImportError",
    # Text utils
    "truncate_text",
    "content_to_text",
    "content_to_lines",
    "strip_html_tags",
    "split_italic_runs",
    "mask_secret",
    "sanitize_filename",
]
