"""Markdown preview formatter."""

from typing import List

from finformatter.core.enums import SegmentType
from finformatter.core.paper import AnalysisResult, Journal, Segment
from finformatter.utils.logging import get_logger
from finformatter.utils.text_utils import content_to_lines, strip_html_tags

logger = get_logger(__name__)


class MarkdownFormatter:
    """Format an analysis result as a Markdown preview."""

    def format(self, result: AnalysisResult, journal: Journal) -> str:
        """Format result as Markdown.

        Args:
            result: Analysis result.
            journal: Target journal.

        Returns:
            Markdown string.
        """
        logger.info("formatting_markdown_preview", journal=journal.id, segments=len(result.segments))

        lines: List[str] = []

        lines.append(f"<!-- {journal.name} | {journal.rules.citation} | {journal.rules.font} -->")
        lines.append("")

        lines.extend(self._format_report(result))

        for segment in result.segments:
            lines.extend(self._format_segment(segment))

        markdown_output = "\n".join(lines).rstrip() + "\n"

        logger.info("markdown_formatted", size=len(markdown_output))

        return markdown_output

    def _format_report(self, result: AnalysisResult) -> List[str]:
        """Compliance report, audit alerts and title suggestions as a quote block."""
        lines: List[str] = []
        report = result.status_report

        if report:
            status = {True: "compliant", False: "not compliant"}.get(report.is_compliant, "unknown")
            lines.append(f"> **Compliance**: {status}")
            if report.title_count is not None:
                lines.append(f"> **Title length**: {report.title_count}")
            if report.abstract_count is not None:
                lines.append(f"> **Abstract length**: {report.abstract_count}")
            if report.compliance_summary:
                lines.append(f"> {report.compliance_summary}")
            for change in report.major_changes:
                lines.append(f"> - {change}")
            lines.append("")

        if result.audit_alerts:
            lines.append("> **Audit alerts**")
            for alert in result.audit_alerts:
                lines.append(f"> - ⚠ {alert}")
            lines.append("")

        if result.title_suggestions:
            lines.append("> **Title suggestions**")
            for suggestion in result.title_suggestions:
                lines.append(f"> - {suggestion}")
            lines.append("")

        if lines:
            lines.append("---")
            lines.append("")

        return lines

    def _format_segment(self, segment: Segment) -> List[str]:
        """Format one segment as Markdown lines, followed by a blank line."""
        text = segment.text.strip()
        kind = segment.type

        if kind == SegmentType.TITLE:
            lines = [f"# {strip_html_tags(text)}"]
        elif kind == SegmentType.AUTHOR:
            lines = [f"**{text}**"]
        elif kind == SegmentType.ABSTRACT:
            lines = ["**Abstract**", "", f"*{text}*"]
        elif kind == SegmentType.KEYWORDS:
            lines = [f"**Keywords**: {text}"]
        elif kind == SegmentType.JEL:
            lines = [f"**JEL Classification**: {text}"]
        elif kind == SegmentType.HEADING_L1:
            lines = [f"## {strip_html_tags(text)}"]
        elif kind == SegmentType.HEADING_L2:
            lines = [f"### {strip_html_tags(text)}"]
        elif kind == SegmentType.TABLE:
            lines = self._format_table(segment)
        elif kind == SegmentType.FIGURE:
            caption = segment.caption_text or text
            lines = [f"*Figure: {caption}*"]
        elif kind == SegmentType.FOOTNOTE:
            lines = [f"<sup>*</sup> {text}"]
        elif kind == SegmentType.REFERENCES:
            lines = ["## References", ""]
            lines.extend(f"- {entry}" for entry in content_to_lines(segment.content))
        else:
            lines = [text.replace("<i>", "*").replace("</i>", "*")]

        lines.append("")
        return lines

    def _format_table(self, segment: Segment) -> List[str]:
        lines: List[str] = []
        rows = segment.rows

        if segment.caption_text:
            lines.append(f"**{segment.caption_text}**")
            lines.append("")

        if rows:
            width = max(len(row) for row in rows)
            padded = [row + [""] * (width - len(row)) for row in rows]
            lines.append("| " + " | ".join(self._cell(c) for c in padded[0]) + " |")
            lines.append("|" + "---|" * width)
            for row in padded[1:]:
                lines.append("| " + " | ".join(self._cell(c) for c in row) + " |")
        elif segment.text:
            lines.append(segment.text)

        if segment.source_text:
            lines.append("")
            lines.append(f"*Source: {segment.source_text}*")

        return lines

    @staticmethod
    def _cell(value: str) -> str:
        return strip_html_tags(value).replace("|", "\\|").replace("\n", " ")
