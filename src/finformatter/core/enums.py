"""Enums for FinFormatter."""

from enum import Enum


class ProviderName(str, Enum):
    """Supported AI providers."""

    GLM = "glm"
    DEEPSEEK = "deepseek"
    GEMINI = "gemini"


class InputMode(str, Enum):
    """How much of the paper the input text covers."""

    FULL = "full"
    SNIPPET = "snippet"


class SegmentType(str, Enum):
    """Structural segment types produced by the model.

    NOTE: Member order has no functional meaning. Rendering order is the
    order of segments in the analysis result.
    """

    TITLE = "title"
    AUTHOR = "author"
    ABSTRACT = "abstract"
    KEYWORDS = "keywords"
    JEL = "jel"
    HEADING_L1 = "heading_l1"
    HEADING_L2 = "heading_l2"
    BODY = "body"
    TABLE = "table"
    FIGURE = "figure"
    FOOTNOTE = "footnote"
    REFERENCES = "references"


class OutputFormat(str, Enum):
    """Preview output formats."""

    MARKDOWN = "markdown"
    HTML = "html"
    JSON = "json"
    TEXT = "text"
