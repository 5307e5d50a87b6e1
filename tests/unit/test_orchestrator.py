# tests/unit/test_orchestrator.py
"""Unit tests for the fallback orchestrator."""

import asyncio
import json
from unittest.mock import AsyncMock, Mock, patch

import pytest

from finformatter.core.config import ProviderConfig
from finformatter.core.enums import InputMode
from finformatter.core.paper import AnalysisRequest
from finformatter.core.prompts import SNIPPET_NOTE
from finformatter.integrations.provider_factory import create_provider_client
from finformatter.pipeline.orchestrator import FallbackOrchestrator
from finformatter.utils.exceptions import (
    AllProvidersFailedError,
    MalformedResponseError,
    NoActiveProviderError,
    TransportError,
    UnsupportedProviderError,
)

VALID = json.dumps({"segments": [{"type": "body", "content": "Reformatted."}]})
TEXT = "A sufficiently long paper draft about credit spreads."


def _request(configs, mode=InputMode.FULL):
    return AnalysisRequest(text=TEXT, mode=mode, providers=configs)


def _calls(factory):
    return [c.args[0].provider for c in factory.call_args_list]


@pytest.mark.unit
@pytest.mark.asyncio
class TestFallbackOrchestrator:
    """Tests for FallbackOrchestrator.analyze."""

    async def test_first_success_wins(self, client_factory, provider_configs, sample_journal):
        """Should return the first valid result and contact nobody else."""
        factory = client_factory({"glm": VALID, "deepseek": VALID, "gemini": VALID})

        result = await FallbackOrchestrator(factory).analyze(_request(provider_configs), sample_journal)

        assert result.segments[0].text == "Reformatted."
        assert _calls(factory) == ["glm"]

    async def test_falls_back_on_transport_error(
        self, client_factory, provider_configs, sample_journal
    ):
        """Should move to the next provider after a 429."""
        factory = client_factory(
            {
                "glm": TransportError("glm returned HTTP 429", status_code=429),
                "deepseek": VALID,
                "gemini": VALID,
            }
        )

        result = await FallbackOrchestrator(factory).analyze(_request(provider_configs), sample_journal)

        assert len(result.segments) == 1
        assert _calls(factory) == ["glm", "deepseek"]

    async def test_rate_limit_then_success_logs_one_failure(
        self, client_factory, provider_configs, sample_journal
    ):
        """Should record exactly one diagnostic before the successful attempt."""
        factory = client_factory(
            {"glm": TransportError("glm returned HTTP 429", status_code=429), "deepseek": VALID}
        )

        with patch("finformatter.pipeline.orchestrator.logger") as mock_logger:
            await FallbackOrchestrator(factory).analyze(_request(provider_configs), sample_journal)

        failed = [
            c for c in mock_logger.warning.call_args_list if c.args[0] == "provider_attempt_failed"
        ]
        assert len(failed) == 1
        assert failed[0].kwargs["provider"] == "glm"
        assert failed[0].kwargs["status_code"] == 429

        succeeded = [c for c in mock_logger.info.call_args_list if c.args[0] == "analysis_succeeded"]
        assert succeeded[0].kwargs["provider"] == "deepseek"
        assert succeeded[0].kwargs["failed_before"] == 1

    async def test_unsupported_provider_logged_as_error(self, client_factory, sample_journal):
        configs = [
            ProviderConfig(provider="openai", model_name="gpt-4o", api_key="k"),
            ProviderConfig(provider="glm", model_name="glm-4-flash", api_key="k"),
        ]
        fake = client_factory({"glm": VALID})

        def factory(config, timeout):
            if config.provider == "openai":
                return create_provider_client(config, timeout)
            return fake(config, timeout)

        with patch("finformatter.pipeline.orchestrator.logger") as mock_logger:
            await FallbackOrchestrator(factory).analyze(_request(configs), sample_journal)

        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args.kwargs["error_type"] == "UnsupportedProviderError"

    async def test_falls_back_on_unwrapped_exception(
        self, client_factory, provider_configs, sample_journal
    ):
        """Should move on when a client raises an error outside our hierarchy."""
        factory = client_factory(
            {
                "glm": ConnectionResetError("reset"),
                "deepseek": json.dumps({"segments": [{"type": "title", "content": "X"}]}),
            }
        )

        with patch("finformatter.pipeline.orchestrator.logger") as mock_logger:
            result = await FallbackOrchestrator(factory).analyze(
                _request(provider_configs), sample_journal
            )

        assert result.segments[0].text == "X"
        assert _calls(factory) == ["glm", "deepseek"]
        failed = mock_logger.warning.call_args.kwargs
        assert failed["error_type"] == "ConnectionResetError"
        assert failed["unexpected"] is True

    async def test_client_construction_error_falls_back(
        self, client_factory, provider_configs, sample_journal
    ):
        fake = client_factory({"deepseek": VALID})

        def factory(config, timeout):
            if config.provider == "glm":
                raise ValueError("bad base url")
            return fake(config, timeout)

        result = await FallbackOrchestrator(factory).analyze(_request(provider_configs), sample_journal)

        assert len(result.segments) == 1

    async def test_unwrapped_exceptions_reach_aggregate(
        self, client_factory, provider_configs, sample_journal
    ):
        """Should list untyped failures in the final diagnostic."""
        factory = client_factory(
            {
                "glm": RecursionError("too deep"),
                "deepseek": OSError("socket closed"),
                "gemini": TransportError("HTTP 500", 500),
            }
        )

        with pytest.raises(AllProvidersFailedError) as exc_info:
            await FallbackOrchestrator(factory).analyze(_request(provider_configs), sample_journal)

        assert [f.error_type for f in exc_info.value.failures] == [
            "RecursionError",
            "OSError",
            "TransportError",
        ]

    async def test_falls_back_on_malformed_payload(
        self, client_factory, provider_configs, sample_journal
    ):
        """Should treat unparsable text like any other provider failure."""
        factory = client_factory({"glm": "not json at all", "deepseek": "[]", "gemini": VALID})

        result = await FallbackOrchestrator(factory).analyze(_request(provider_configs), sample_journal)

        assert result.segments[0].type == "body"
        assert _calls(factory) == ["glm", "deepseek", "gemini"]

    async def test_fenced_payload_is_accepted(
        self, client_factory, provider_configs, sample_journal, sample_raw
    ):
        factory = client_factory({"glm": sample_raw, "deepseek": VALID, "gemini": VALID})

        result = await FallbackOrchestrator(factory).analyze(_request(provider_configs), sample_journal)

        assert result.status_report is not None
        assert _calls(factory) == ["glm"]

    async def test_all_failed_lists_every_attempt(
        self, client_factory, provider_configs, sample_journal
    ):
        """Should raise with one failure record per attempted provider, in order."""
        factory = client_factory(
            {
                "glm": TransportError("glm returned HTTP 401", status_code=401),
                "deepseek": '{"metadata": {}}',
                "gemini": TransportError("gemini request failed"),
            }
        )

        with pytest.raises(AllProvidersFailedError) as exc_info:
            await FallbackOrchestrator(factory).analyze(_request(provider_configs), sample_journal)

        failures = exc_info.value.failures
        assert [f.provider for f in failures] == ["glm", "deepseek", "gemini"]
        assert failures[0].status_code == 401
        assert failures[1].error_type == "MalformedResponseError"
        assert failures[2].status_code is None

    async def test_all_failed_message_is_user_facing(
        self, client_factory, provider_configs, sample_journal
    ):
        """Should not leak provider details into the summary message."""
        factory = client_factory({p.provider: TransportError("HTTP 500", 500) for p in provider_configs})

        with pytest.raises(AllProvidersFailedError) as exc_info:
            await FallbackOrchestrator(factory).analyze(_request(provider_configs), sample_journal)

        assert "500" not in str(exc_info.value)
        assert "API keys" in str(exc_info.value)

    async def test_inactive_providers_are_skipped(
        self, client_factory, provider_configs, sample_journal
    ):
        """Should never contact a disabled or keyless provider."""
        provider_configs[0].enabled = False
        provider_configs[1].api_key = "  "
        factory = client_factory({"gemini": VALID})

        await FallbackOrchestrator(factory).analyze(_request(provider_configs), sample_journal)

        assert _calls(factory) == ["gemini"]

    @pytest.mark.parametrize("configs", [[], "all_disabled", "all_keyless"])
    async def test_no_active_provider(self, configs, client_factory, provider_configs, sample_journal):
        """Should fail fast without contacting anybody."""
        if configs == "all_disabled":
            configs = [p.model_copy(update={"enabled": False}) for p in provider_configs]
        elif configs == "all_keyless":
            configs = [p.model_copy(update={"api_key": ""}) for p in provider_configs]
        factory = client_factory({})

        with pytest.raises(NoActiveProviderError):
            await FallbackOrchestrator(factory).analyze(_request(configs), sample_journal)

        factory.assert_not_called()

    async def test_same_prompt_sent_to_every_provider(
        self, client_factory, provider_configs, sample_journal
    ):
        """Should build the prompt once and reuse it across attempts."""
        factory = client_factory(
            {"glm": TransportError("x", 503), "deepseek": TransportError("y", 502), "gemini": VALID}
        )

        with patch(
            "finformatter.pipeline.orchestrator.build_prompt", return_value="PROMPT"
        ) as mock_build:
            await FallbackOrchestrator(factory).analyze(_request(provider_configs), sample_journal)

        mock_build.assert_called_once()
        for client in factory.clients.values():
            client.send.assert_awaited_once_with("PROMPT")

    async def test_snippet_mode_reaches_prompt(
        self, client_factory, provider_configs, sample_journal
    ):
        factory = client_factory({"glm": VALID})

        await FallbackOrchestrator(factory).analyze(
            _request(provider_configs, InputMode.SNIPPET), sample_journal
        )

        prompt = factory.clients["glm"].send.call_args.args[0]
        assert SNIPPET_NOTE in prompt
        assert prompt.endswith(f"Content: {TEXT}")

    async def test_attempts_are_sequential(self, provider_configs, sample_journal):
        """Should start a provider only after the previous attempt finished."""
        events = []

        def factory(config, timeout):
            async def send(prompt):
                events.append(f"start:{config.provider}")
                await asyncio.sleep(0)
                events.append(f"end:{config.provider}")
                if config.provider != "gemini":
                    raise TransportError("busy", 503)
                return VALID

            client = Mock()
            client.send = send
            return client

        await FallbackOrchestrator(factory).analyze(_request(provider_configs), sample_journal)

        assert events == [
            "start:glm", "end:glm",
            "start:deepseek", "end:deepseek",
            "start:gemini", "end:gemini",
        ]

    async def test_unsupported_provider_is_recorded(self, client_factory, sample_journal):
        """Should record an unknown provider tag and fall back."""
        configs = [
            ProviderConfig(provider="openai", model_name="gpt-4o", api_key="k"),
            ProviderConfig(provider="glm", model_name="glm-4-flash", api_key="k"),
        ]
        fake = client_factory({"glm": VALID})

        def factory(config, timeout):
            if config.provider == "openai":
                return create_provider_client(config, timeout)
            return fake(config, timeout)

        result = await FallbackOrchestrator(factory).analyze(_request(configs), sample_journal)

        assert len(result.segments) == 1

    async def test_unsupported_only_provider_fails(self, sample_journal):
        configs = [ProviderConfig(provider="openai", model_name="gpt-4o", api_key="k")]

        with pytest.raises(AllProvidersFailedError) as exc_info:
            await FallbackOrchestrator().analyze(_request(configs), sample_journal)

        assert exc_info.value.failures[0].error_type == UnsupportedProviderError.__name__

    async def test_attempt_timeout_falls_back(self, provider_configs, sample_journal):
        """Should abandon a hanging provider after the attempt timeout."""

        def factory(config, timeout):
            client = Mock()
            if config.provider == "glm":
                async def hang(prompt):
                    await asyncio.sleep(10)

                client.send = hang
            else:
                client.send = AsyncMock(return_value=VALID)
            return client

        orchestrator = FallbackOrchestrator(factory, attempt_timeout=0.01)
        result = await orchestrator.analyze(_request(provider_configs), sample_journal)

        assert len(result.segments) == 1

    async def test_timeout_passed_to_factory(self, client_factory, provider_configs, sample_journal):
        factory = client_factory({"glm": VALID})

        await FallbackOrchestrator(factory, attempt_timeout=45.0).analyze(
            _request(provider_configs), sample_journal
        )

        assert factory.call_args.args[1] == 45.0

    async def test_malformed_error_does_not_escape(
        self, client_factory, provider_configs, sample_journal
    ):
        """Should never surface a single-provider error to the caller."""
        factory = client_factory({p.provider: MalformedResponseError("bad") for p in provider_configs})

        with pytest.raises(AllProvidersFailedError):
            await FallbackOrchestrator(factory).analyze(_request(provider_configs), sample_journal)

    async def test_request_snapshot_is_isolated(
        self, client_factory, provider_configs, sample_journal
    ):
        """Should use the providers captured in the request."""
        request = _request([p.model_copy() for p in provider_configs])
        provider_configs[0].api_key = "changed"
        factory = client_factory({"glm": VALID})

        await FallbackOrchestrator(factory).analyze(request, sample_journal)

        assert factory.call_args.args[0].api_key == "k-glm"
