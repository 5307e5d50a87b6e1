"""HTML preview formatter."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape

from finformatter.core.paper import AnalysisResult, Journal
from finformatter.utils.logging import get_logger
from finformatter.utils.text_utils import content_to_lines

logger = get_logger(__name__)


def italic_html(text: str) -> Markup:
    """Escape text but keep the model's ``<i>`` variable markers."""
    escaped = str(escape(text))
    escaped = escaped.replace("&lt;i&gt;", "<i>").replace("&lt;/i&gt;", "</i>")
    return Markup(escaped)


class HtmlPreviewFormatter:
    """Formats an analysis result as a standalone HTML preview page.

    Uses the Jinja2 template ``preview.html``. Segment order in the page is
    the order of ``result.segments``.
    """

    def __init__(self) -> None:
        templates_dir = Path(__file__).parent.parent.parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(templates_dir),
            autoescape=select_autoescape(["html", "xml"]),
        )
        self.env.filters["italic_html"] = italic_html
        self.env.filters["lines"] = content_to_lines

    def format(self, result: AnalysisResult, journal: Journal) -> str:
        """Render the preview page.

        Args:
            result: Analysis result.
            journal: Target journal (font and three-line table style).

        Returns:
            HTML string.
        """
        logger.debug("formatting_html_preview", journal=journal.id, segments=len(result.segments))

        template = self.env.get_template("preview.html")
        html = template.render(
            journal=journal,
            rules=journal.rules,
            result=result,
            report=result.status_report,
            segments=result.segments,
        )

        logger.debug("html_formatted", html_length=len(html))
        return html
