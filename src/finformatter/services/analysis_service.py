"""Paper analysis entry point used by the CLI."""

from typing import Optional, Union

from finformatter.core.catalog import RuleCatalog
from finformatter.core.enums import InputMode
from finformatter.core.paper import AnalysisRequest, AnalysisResult, Journal
from finformatter.pipeline.orchestrator import FallbackOrchestrator
from finformatter.services.config_store import ConfigStore
from finformatter.utils.exceptions import InputTooShortError
from finformatter.utils.logging import get_logger

logger = get_logger(__name__)


class PaperAnalysisService:
    """Validates input, snapshots provider settings and runs the fallback chain."""

    def __init__(
        self,
        store: ConfigStore,
        catalog: Optional[RuleCatalog] = None,
        orchestrator: Optional[FallbackOrchestrator] = None,
        min_text_length: int = 20,
    ):
        """Initialize service.

        Args:
            store: Source of provider entries, read on every analysis.
            catalog: Journal rule catalog (built-in journals if omitted).
            orchestrator: Fallback orchestrator (default instance if omitted).
            min_text_length: Minimum length of the stripped input text.
        """
        self.store = store
        self.catalog = catalog or RuleCatalog()
        self.orchestrator = orchestrator or FallbackOrchestrator()
        self.min_text_length = min_text_length

    def validate_text(self, text: str) -> str:
        """Check the input is long enough to analyze.

        Raises:
            InputTooShortError: If the stripped text is below the minimum.
        """
        stripped = (text or "").strip()
        if len(stripped) < self.min_text_length:
            logger.warning(
                "input_too_short", length=len(stripped), min_length=self.min_text_length
            )
            raise InputTooShortError(len(stripped), self.min_text_length)
        return text

    def build_request(self, text: str, mode: InputMode = InputMode.FULL) -> AnalysisRequest:
        """Validate text and snapshot the current provider configuration."""
        self.validate_text(text)
        return AnalysisRequest(text=text, mode=mode, providers=self.store.get_provider_configs())

    def resolve_journal(self, journal: Union[Journal, str, None]) -> Journal:
        if isinstance(journal, Journal):
            return journal
        if journal is None:
            return self.catalog.default
        return self.catalog.get(journal)

    async def analyze(
        self,
        text: str,
        journal: Union[Journal, str, None] = None,
        mode: InputMode = InputMode.FULL,
    ) -> AnalysisResult:
        """Analyze paper text for a target journal.

        Args:
            text: Raw paper text.
            journal: Journal, journal id, or None for the catalog default.
            mode: Full paper or snippet.

        Returns:
            Validated analysis result from the first provider that succeeded.

        Raises:
            InputTooShortError: Before any provider is contacted.
            NoActiveProviderError: If no provider is usable.
            AllProvidersFailedError: If every provider failed.
        """
        request = self.build_request(text, mode)
        target = self.resolve_journal(journal)

        logger.info(
            "paper_analysis_requested",
            journal=target.id,
            mode=mode.value,
            text_length=len(text),
        )

        return await self.orchestrator.analyze(request, target)
