"""Core domain models and configurations."""

from finformatter.core.catalog import JOURNALS, RuleCatalog
from finformatter.core.config import Config, ProviderConfig
from finformatter.core.enums import InputMode, OutputFormat, ProviderName, SegmentType
from finformatter.core.paper import (
    AnalysisRequest,
    AnalysisResult,
    Journal,
    JournalRules,
    PaperMetadata,
    ProviderFailure,
    Segment,
    StatusReport,
)
from finformatter.core.prompts import SYSTEM_INSTRUCTION, build_prompt

__all__ = [
    # Paper models
    "AnalysisRequest",
    "AnalysisResult",
    "PaperMetadata",
    "ProviderFailure",
    "Segment",
    "StatusReport",
    # Journal catalog
    "Journal",
    "JournalRules",
    "JOURNALS",
    "RuleCatalog",
    # Prompts
    "SYSTEM_INSTRUCTION",
    "build_prompt",
    # Configuration models
    "Config",
    "ProviderConfig",
    # Enums
    "InputMode",
    "OutputFormat",
    "ProviderName",
    "SegmentType",
]
