"""Fallback orchestration across AI providers."""

import asyncio
from typing import List, Optional

from finformatter.core.config import ProviderConfig
from finformatter.core.paper import AnalysisRequest, AnalysisResult, Journal, ProviderFailure
from finformatter.core.prompts import build_prompt
from finformatter.integrations.provider_factory import ClientFactory, create_provider_client
from finformatter.pipeline.sanitizer import ResponseSanitizer
from finformatter.utils.exceptions import (
    AllProvidersFailedError,
    MalformedResponseError,
    NoActiveProviderError,
    ProviderError,
    TransportError,
    UnsupportedProviderError,
)
from finformatter.utils.logging import get_logger
from finformatter.utils.text_utils import truncate_text

logger = get_logger(__name__)

RAW_PREVIEW_LENGTH = 500


class FallbackOrchestrator:
    """Tries enabled providers in priority order until one returns a valid result.

    Attempts are strictly sequential: a provider is only called after the
    previous one has failed. The first valid result wins.
    """

    def __init__(
        self,
        client_factory: ClientFactory = create_provider_client,
        sanitizer: Optional[ResponseSanitizer] = None,
        attempt_timeout: Optional[float] = 120.0,
    ):
        """Initialize orchestrator.

        Args:
            client_factory: Builds a ProviderClient for a provider entry.
            sanitizer: Response sanitizer (default instance if omitted).
            attempt_timeout: Upper bound in seconds for one provider attempt,
                None to disable.
        """
        self.client_factory = client_factory
        self.sanitizer = sanitizer or ResponseSanitizer()
        self.attempt_timeout = attempt_timeout

    async def analyze(self, request: AnalysisRequest, journal: Journal) -> AnalysisResult:
        """Run one analysis through the fallback chain.

        Args:
            request: Paper text, input mode and provider snapshot.
            journal: Target journal whose rules go into the prompt.

        Returns:
            First valid analysis result.

        Raises:
            NoActiveProviderError: If no provider is enabled with a credential.
            AllProvidersFailedError: If every provider attempt failed.
        """
        providers = request.active_providers()
        if not providers:
            logger.warning("no_active_provider", configured=len(request.providers))
            raise NoActiveProviderError()

        prompt = build_prompt(journal, request.text, request.mode)

        logger.info(
            "analysis_started",
            journal=journal.id,
            mode=request.mode.value,
            providers=[p.provider for p in providers],
            text_length=len(request.text),
        )

        failures: List[ProviderFailure] = []

        for position, config in enumerate(providers, start=1):
            try:
                result = await self._attempt(config, prompt)
            except Exception as e:
                # untyped SDK or decoder errors fall back like provider errors
                failures.append(ProviderFailure.from_error(config, e))
                self._log_failure(config, e, position, len(providers))
                continue

            logger.info(
                "analysis_succeeded",
                provider=config.provider,
                model=config.model_name,
                attempt=position,
                failed_before=len(failures),
                segments=len(result.segments),
            )
            return result

        logger.error(
            "all_providers_failed",
            attempts=len(failures),
            failures=[f.model_dump() for f in failures],
        )
        raise AllProvidersFailedError(failures)

    async def _attempt(self, config: ProviderConfig, prompt: str) -> AnalysisResult:
        """One provider attempt: send, then sanitize and validate."""
        logger.info("provider_attempt", provider=config.provider, model=config.model_name)

        client = self.client_factory(config, self.attempt_timeout or 120.0)

        try:
            if self.attempt_timeout:
                raw = await asyncio.wait_for(client.send(prompt), timeout=self.attempt_timeout)
            else:
                raw = await client.send(prompt)
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"{config.provider} did not answer within {self.attempt_timeout:g}s"
            ) from e

        try:
            return self.sanitizer.parse(raw)
        except MalformedResponseError:
            logger.warning(
                "malformed_provider_response",
                provider=config.provider,
                raw_length=len(raw or ""),
                raw_preview=truncate_text(raw or "", RAW_PREVIEW_LENGTH),
            )
            logger.debug("malformed_provider_response_raw", provider=config.provider, raw=raw)
            raise

    def _log_failure(
        self, config: ProviderConfig, error: Exception, position: int, total: int
    ) -> None:
        log = logger.error if isinstance(error, UnsupportedProviderError) else logger.warning
        log(
            "provider_attempt_failed",
            provider=config.provider,
            model=config.model_name,
            error_type=type(error).__name__,
            error=str(error),
            status_code=getattr(error, "status_code", None),
            attempt=position,
            remaining=total - position,
            unexpected=not isinstance(error, ProviderError),
        )
