"""Output formatters."""

from finformatter.pipeline.formatters.html_formatter import HtmlPreviewFormatter
from finformatter.pipeline.formatters.json_formatter import JSONFormatter
from finformatter.pipeline.formatters.markdown_formatter import MarkdownFormatter
from finformatter.pipeline.formatters.text_formatter import PlainTextFormatter

__all__ = ["HtmlPreviewFormatter", "JSONFormatter", "MarkdownFormatter", "PlainTextFormatter"]
