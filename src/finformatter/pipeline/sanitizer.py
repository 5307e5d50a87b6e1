"""Cleanup and shape validation of raw provider payloads."""

import json
import re
from typing import Any

from pydantic import ValidationError

from finformatter.core.paper import AnalysisResult
from finformatter.utils.exceptions import MalformedResponseError
from finformatter.utils.logging import get_logger

logger = get_logger(__name__)

# Code fence markers models wrap JSON in despite being told not to
FENCE_PATTERN = re.compile(r"```(?:json)?")


class ResponseSanitizer:
    """Turns raw model text into a validated :class:`AnalysisResult`.

    Errors never carry the raw payload. Callers log it themselves when a
    parse fails.
    """

    @staticmethod
    def sanitize(text: str) -> str:
        """Strip every code fence marker and surrounding whitespace.

        Removal repeats until no marker is left, so the output never contains
        a fence and ``sanitize(sanitize(x)) == sanitize(x)``.
        """
        previous = None
        while previous != text:
            previous = text
            text = FENCE_PATTERN.sub("", text)
        return text.strip()

    @staticmethod
    def validate(data: Any) -> AnalysisResult:
        """Check the minimal result shape: an object with a ``segments`` list.

        Raises:
            MalformedResponseError: If the shape check fails.
        """
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Expected a JSON object, got {type(data).__name__}"
            )
        if "segments" not in data:
            raise MalformedResponseError("Response is missing 'segments'")
        if not isinstance(data["segments"], list):
            raise MalformedResponseError(
                f"'segments' must be a list, got {type(data['segments']).__name__}"
            )

        try:
            return AnalysisResult.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(
                f"Response failed schema validation ({e.error_count()} errors)"
            ) from e

    def parse(self, raw: str) -> AnalysisResult:
        """Sanitize, decode and validate a raw payload.

        Raises:
            MalformedResponseError: If the text is not JSON or fails validation.
        """
        cleaned = self.sanitize(raw or "")
        if not cleaned:
            raise MalformedResponseError("Response is empty")

        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError as e:
            raise MalformedResponseError(
                f"Response is not valid JSON: {e.msg} at line {e.lineno} column {e.colno}"
            ) from e
        except RecursionError as e:
            raise MalformedResponseError("Response JSON is nested too deeply") from e

        result = self.validate(data)
        logger.debug("response_parsed", segments=len(result.segments))
        return result
