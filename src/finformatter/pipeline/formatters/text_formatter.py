"""Plain text formatter for clipboard copy."""

from finformatter.core.enums import SegmentType
from finformatter.core.paper import AnalysisResult
from finformatter.utils.text_utils import strip_html_tags


class PlainTextFormatter:
    """Paragraphs separated by blank lines; tables as caption plus tab-separated rows."""

    def format(self, result: AnalysisResult) -> str:
        blocks = []

        for segment in result.segments:
            if segment.type == SegmentType.TABLE and segment.rows:
                rows = "\n".join("\t".join(strip_html_tags(c) for c in row) for row in segment.rows)
                blocks.append(f"{segment.caption_text}\n{rows}")
            else:
                blocks.append(strip_html_tags(segment.text))

        return "\n\n".join(blocks)
