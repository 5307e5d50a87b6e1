"""JSON output formatter."""

import json
from datetime import datetime
from typing import Any, Dict, Optional

from finformatter.core.paper import AnalysisResult, Journal
from finformatter.utils.logging import get_logger

logger = get_logger(__name__)


class JSONFormatter:
    """Format an analysis result as JSON.

    The ``result`` block keeps the provider wire shape, so the file can be
    loaded again with :meth:`load` (used by ``finformatter export``).
    """

    def format(self, result: AnalysisResult, journal: Optional[Journal] = None) -> str:
        """Format result as JSON.

        Args:
            result: Analysis result.
            journal: Target journal, recorded in the envelope when given.

        Returns:
            JSON string.
        """
        logger.info("formatting_json_result", segments=len(result.segments))

        try:
            json_output = json.dumps(self._build_dict(result, journal), indent=2, ensure_ascii=False)

            logger.info("json_formatted", size=len(json_output))

            return json_output

        except Exception as e:
            logger.error("json_formatting_failed", error=str(e))
            raise

    def _build_dict(self, result: AnalysisResult, journal: Optional[Journal]) -> Dict[str, Any]:
        return {
            "journal": journal.id if journal else None,
            "generated_at": datetime.now().isoformat(timespec="seconds"),
            "result": result.to_payload(),
        }

    @staticmethod
    def load(text: str) -> Dict[str, Any]:
        """Read a file written by :meth:`format` (or a bare result object).

        Returns:
            Dict with ``journal`` (may be None) and ``result`` (raw payload).
        """
        data = json.loads(text)
        if isinstance(data, dict) and "result" in data:
            return {"journal": data.get("journal"), "result": data["result"]}
        return {"journal": None, "result": data}
