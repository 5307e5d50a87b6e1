"""Analysis pipeline: fallback orchestration, response sanitizing and formatting."""

from finformatter.pipeline.orchestrator import FallbackOrchestrator
from finformatter.pipeline.sanitizer import ResponseSanitizer

__all__ = ["FallbackOrchestrator", "ResponseSanitizer"]
