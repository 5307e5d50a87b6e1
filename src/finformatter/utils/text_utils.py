"""Text processing utilities."""

import re
from typing import Any, List, Tuple

_ITALIC_TAG = re.compile(r"<i>(.*?)</i>", re.IGNORECASE | re.DOTALL)
_ANY_TAG = re.compile(r"</?[a-zA-Z][^>]*>")


def truncate_text(text: str, max_length: int, suffix: str = "...") -> str:
    """Truncate text to maximum length.

    Args:
        text: Text to truncate
        max_length: Maximum length
        suffix: Suffix to add when truncating

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text

    return text[: max_length - len(suffix)] + suffix


def content_to_text(content: Any, separator: str = ". ") -> str:
    """Flatten a model-produced content value into display text.

    Models do not always honour the string contract for ``content``: lists
    (e.g. reference entries) and objects (e.g. ``{"author": ..., "title": ...}``)
    show up too.

    Args:
        content: Any JSON value.
        separator: Joiner for object values.

    Returns:
        Plain string; empty for ``None``.
    """
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, bool):
        return str(content).lower()
    if isinstance(content, (int, float)):
        return str(content)
    if isinstance(content, list):
        return "\n".join(content_to_text(item, separator) for item in content)
    if isinstance(content, dict):
        return separator.join(
            content_to_text(value, separator) for value in content.values() if value
        )
    return str(content)


def content_to_lines(content: Any) -> List[str]:
    """Split a content value into one line per list entry."""
    if isinstance(content, list):
        return [content_to_text(item) for item in content if item not in (None, "")]
    text = content_to_text(content)
    return [line for line in text.splitlines() if line.strip()]


def strip_html_tags(text: str) -> str:
    """Remove inline markup such as ``<i>`` that the model injects."""
    return _ANY_TAG.sub("", text)


def split_italic_runs(text: str) -> List[Tuple[str, bool]]:
    """Split text on ``<i>...</i>`` markers.

    Args:
        text: Text with optional italic markers.

    Returns:
        List of (fragment, is_italic) tuples with other tags removed. Empty
        fragments are dropped.
    """
    runs: List[Tuple[str, bool]] = []
    position = 0

    for match in _ITALIC_TAG.finditer(text):
        before = strip_html_tags(text[position : match.start()])
        if before:
            runs.append((before, False))
        inner = strip_html_tags(match.group(1))
        if inner:
            runs.append((inner, True))
        position = match.end()

    tail = strip_html_tags(text[position:])
    if tail:
        runs.append((tail, False))

    return runs


def mask_secret(secret: str, visible: int = 4) -> str:
    """Mask an API key for display, keeping the last characters."""
    secret = secret.strip()
    if not secret:
        return ""
    if len(secret) <= visible:
        return "*" * len(secret)
    return "*" * (len(secret) - visible) + secret[-visible:]


def sanitize_filename(filename: str) -> str:
    """Sanitize filename by removing invalid characters.

    Args:
        filename: Filename to sanitize

    Returns:
        Sanitized filename
    """
    # Invalid on Windows or Unix
    filename = re.sub(r'[<>:"/\\|?*]', "", filename)
    filename = re.sub(r"\s+", "_", filename.strip())

    max_length = 200
    if len(filename) > max_length:
        name, ext = filename.rsplit(".", 1) if "." in filename else (filename, "")
        name = name[: max_length - len(ext) - 1]
        filename = f"{name}.{ext}" if ext else name

    return filename
