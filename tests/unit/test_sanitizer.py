# tests/unit/test_sanitizer.py
"""Unit tests for response sanitizer."""

import json

import pytest

from finformatter.pipeline.sanitizer import ResponseSanitizer
from finformatter.utils.exceptions import MalformedResponseError


@pytest.mark.unit
class TestSanitize:
    """Tests for ResponseSanitizer.sanitize."""

    def test_sanitize_removes_json_fence(self):
        """Should strip a ```json fence and surrounding whitespace."""
        raw = '  ```json\n{"segments": []}\n```  '
        assert ResponseSanitizer.sanitize(raw) == '{"segments": []}'

    def test_sanitize_removes_bare_fence(self):
        """Should strip fences without a language tag."""
        assert ResponseSanitizer.sanitize('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_sanitize_leaves_clean_text_alone(self):
        """Should return clean JSON unchanged."""
        assert ResponseSanitizer.sanitize('{"a": 1}') == '{"a": 1}'

    def test_sanitize_removes_nested_markers(self):
        """Should leave no fence even when removal creates a new one."""
        cleaned = ResponseSanitizer.sanitize("``````json{}```")
        assert "```" not in cleaned
        assert cleaned == "{}"

    @pytest.mark.parametrize(
        "raw",
        ['```json\n{"segments": []}\n```', "``` ``` x", "````json````", "  plain  ", ""],
    )
    def test_sanitize_is_idempotent(self, raw):
        """Should give the same output when applied twice."""
        once = ResponseSanitizer.sanitize(raw)
        assert ResponseSanitizer.sanitize(once) == once
        assert "```" not in once


@pytest.mark.unit
class TestValidate:
    """Tests for ResponseSanitizer.validate."""

    def test_validate_accepts_minimal_result(self):
        """Should accept an object with an empty segments list."""
        result = ResponseSanitizer.validate({"segments": []})
        assert result.segments == []
        assert result.metadata is None
        assert result.audit_alerts == []

    def test_validate_rejects_missing_segments(self):
        """Should reject an object without segments."""
        with pytest.raises(MalformedResponseError, match="segments"):
            ResponseSanitizer.validate({"metadata": {"title": "T"}})

    def test_validate_rejects_non_list_segments(self):
        """Should reject segments that are not a list."""
        with pytest.raises(MalformedResponseError, match="list"):
            ResponseSanitizer.validate({"segments": "body text"})

    def test_validate_rejects_top_level_list(self):
        """Should reject a JSON array at the top level."""
        with pytest.raises(MalformedResponseError, match="object"):
            ResponseSanitizer.validate([{"type": "body", "content": "x"}])

    def test_validate_keeps_segments_when_metadata_is_garbage(self):
        """Should drop an unusable metadata block instead of failing."""
        result = ResponseSanitizer.validate({"metadata": "n/a", "segments": [{"type": "body"}]})
        assert result.metadata is None
        assert len(result.segments) == 1


@pytest.mark.unit
class TestParse:
    """Tests for ResponseSanitizer.parse."""

    def test_parse_fenced_payload(self, sample_raw, sample_payload):
        """Should decode a fenced payload into a result."""
        result = ResponseSanitizer().parse(sample_raw)

        assert len(result.segments) == len(sample_payload["segments"])
        assert result.segments[0].type == "title"
        assert result.status_report.is_compliant is False

    def test_parse_rejects_empty_text(self):
        """Should reject a response that is empty after cleanup."""
        with pytest.raises(MalformedResponseError, match="empty"):
            ResponseSanitizer().parse("```json\n```")

    def test_parse_rejects_invalid_json(self):
        """Should reject text that is not JSON."""
        with pytest.raises(MalformedResponseError, match="not valid JSON"):
            ResponseSanitizer().parse("Sorry, I cannot help with that.")

    def test_parse_rejects_truncated_json(self):
        """Should reject a payload cut off mid-object."""
        payload = json.dumps({"segments": [{"type": "body", "content": "x"}]})
        with pytest.raises(MalformedResponseError):
            ResponseSanitizer().parse(payload[:-5])

    def test_parse_rejects_deeply_nested_json(self):
        """Should report runaway nesting as a malformed response."""
        with pytest.raises(MalformedResponseError, match="nested too deeply"):
            ResponseSanitizer().parse("[" * 200000)

    def test_parse_error_does_not_echo_payload(self):
        """Should not put the raw text into the error message."""
        secret_text = "CONFIDENTIAL DRAFT " * 5
        with pytest.raises(MalformedResponseError) as exc_info:
            ResponseSanitizer().parse(secret_text)
        assert "CONFIDENTIAL" not in str(exc_info.value)
