# tests/unit/test_logging.py
"""Unit tests for logging setup."""

import logging

import pytest

from finformatter.utils.logging import (
    LOG_FILE_NAME,
    get_logger,
    mask_credentials,
    setup_logging,
)


@pytest.mark.unit
class TestMaskCredentials:
    """Tests for the credential-masking processor."""

    def test_masks_top_level_key(self):
        event = mask_credentials(None, "info", {"event": "x", "api_key": "sk-1234567890"})
        assert event["api_key"] == "*********7890"

    def test_masks_nested_provider_entry(self):
        """Should mask keys inside a logged provider dict."""
        event = mask_credentials(
            None, "info", {"event": "x", "config": {"provider": "glm", "api_key": "secret-key"}}
        )
        assert event["config"] == {"provider": "glm", "api_key": "******-key"}

    def test_leaves_other_fields(self):
        event = mask_credentials(None, "info", {"event": "x", "provider": "deepseek", "status_code": 429})
        assert event == {"event": "x", "provider": "deepseek", "status_code": 429}


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging."""

    def test_repeated_setup_does_not_stack_handlers(self):
        setup_logging(log_level="WARNING")
        setup_logging(log_level="WARNING")

        assert len(logging.getLogger().handlers) == 1
        assert logging.getLogger().level == logging.WARNING

    def test_sdk_loggers_quieted(self):
        setup_logging(log_level="DEBUG")
        assert logging.getLogger("openai").level == logging.WARNING

    def test_file_log_masks_api_key(self, tmp_path):
        """Should write events to the log file without the raw credential."""
        setup_logging(log_level="INFO", log_dir=tmp_path)

        get_logger("finformatter.tests").info("provider_configured", api_key="sk-abcdef123456")
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = (tmp_path / LOG_FILE_NAME).read_text(encoding="utf-8")
        assert "provider_configured" in content
        assert "sk-abcdef123456" not in content
        assert "3456" in content
