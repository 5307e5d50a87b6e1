"""Word document export of formatted segments."""

from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt

from finformatter.core.enums import SegmentType
from finformatter.core.paper import Journal, Segment
from finformatter.utils.exceptions import ExportError
from finformatter.utils.logging import get_logger
from finformatter.utils.text_utils import (
    content_to_lines,
    sanitize_filename,
    split_italic_runs,
    strip_html_tags,
)

logger = get_logger(__name__)

BODY_SIZE = Pt(12)
TITLE_SIZE = Pt(16)
TABLE_SIZE = Pt(10.5)
SOURCE_SIZE = Pt(9)
FIRST_LINE_INDENT = Pt(24)
LINE_SPACING = 1.5
# Border width in eighths of a point
RULE_WIDTH = "12"

HEADING_SIZES = {
    SegmentType.HEADING_L1.value: Pt(14),
    SegmentType.HEADING_L2.value: Pt(12),
}


def _set_east_asian_font(run_or_style, font: str) -> None:
    rpr = run_or_style.element.get_or_add_rPr()
    rpr.get_or_add_rFonts().set(qn("w:eastAsia"), font)


def _set_cell_borders(cell, top: bool, bottom: bool) -> None:
    """Horizontal rules only; vertical borders are always off."""
    tc_pr = cell._tc.get_or_add_tcPr()
    borders = OxmlElement("w:tcBorders")

    for edge, visible in (("top", top), ("left", False), ("bottom", bottom), ("right", False)):
        element = OxmlElement(f"w:{edge}")
        if visible:
            element.set(qn("w:val"), "single")
            element.set(qn("w:sz"), RULE_WIDTH)
            element.set(qn("w:space"), "0")
            element.set(qn("w:color"), "000000")
        else:
            element.set(qn("w:val"), "nil")
        borders.append(element)

    tc_pr.append(borders)


class DocxExporter:
    """Builds a .docx file that follows the target journal's layout rules."""

    def __init__(self, output_dir: Path = Path(".")):
        self.output_dir = Path(output_dir)

    @staticmethod
    def default_filename(journal: Journal, export_date: Optional[datetime] = None) -> str:
        day = (export_date or datetime.now()).strftime("%Y-%m-%d")
        return sanitize_filename(f"{journal.name}_formatted_{day}") + ".docx"

    def export(
        self,
        segments: Sequence[Segment],
        journal: Journal,
        output_path: Optional[Path] = None,
    ) -> Path:
        """Write segments to a Word document.

        Args:
            segments: Formatted segments in reading order.
            journal: Target journal; its rules drive fonts, italics and tables.
            output_path: Destination file (auto-named in output_dir if omitted).

        Returns:
            Path of the written document.

        Raises:
            ExportError: If there is nothing to export or the file can't be written.
        """
        if not segments:
            raise ExportError("No formatted segments to export")

        document = self.build_document(segments, journal)
        path = Path(output_path) if output_path else self.output_dir / self.default_filename(journal)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            document.save(str(path))
        except OSError as e:
            raise ExportError(f"Failed to write Word document {path}: {e}") from e

        logger.info("docx_exported", path=str(path), journal=journal.id, segments=len(segments))
        return path

    def build_document(self, segments: Sequence[Segment], journal: Journal):
        """Create the in-memory python-docx Document."""
        document = Document()
        rules = journal.rules

        normal = document.styles["Normal"]
        normal.font.name = rules.font
        normal.font.size = BODY_SIZE
        _set_east_asian_font(normal, rules.font)

        for segment in segments:
            seg_type = segment.type

            if seg_type == SegmentType.TITLE.value:
                self._add_title(document, segment)
            elif seg_type in HEADING_SIZES:
                self._add_heading(document, segment, HEADING_SIZES[seg_type])
            elif seg_type == SegmentType.TABLE.value:
                self._add_table(document, segment, journal)
            elif seg_type == SegmentType.REFERENCES.value:
                self._add_references(document, segment)
            elif seg_type == SegmentType.FIGURE.value:
                paragraph = document.add_paragraph()
                paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
                self._add_runs(paragraph, segment.caption_text or segment.text, journal)
            else:
                self._add_body(document, segment, journal)

        return document

    def _add_runs(self, paragraph, text: str, journal: Journal, **font) -> None:
        if journal.rules.variable_italic:
            runs = split_italic_runs(text)
        else:
            runs = [(strip_html_tags(text), False)]

        for fragment, italic in runs:
            run = paragraph.add_run(fragment)
            run.italic = italic or None
            run.font.name = journal.rules.font
            _set_east_asian_font(run, journal.rules.font)
            if font.get("bold"):
                run.bold = True
            if font.get("size"):
                run.font.size = font["size"]

    def _add_title(self, document, segment: Segment) -> None:
        paragraph = document.add_paragraph()
        paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
        paragraph.paragraph_format.space_before = Pt(20)
        paragraph.paragraph_format.space_after = Pt(20)
        run = paragraph.add_run(strip_html_tags(segment.text))
        run.bold = True
        run.font.size = TITLE_SIZE

    def _add_heading(self, document, segment: Segment, size) -> None:
        paragraph = document.add_paragraph()
        paragraph.paragraph_format.space_before = Pt(12)
        paragraph.paragraph_format.space_after = Pt(6)
        run = paragraph.add_run(strip_html_tags(segment.text))
        run.bold = True
        run.font.size = size

    def _add_body(self, document, segment: Segment, journal: Journal) -> None:
        paragraph = document.add_paragraph()
        fmt = paragraph.paragraph_format
        fmt.first_line_indent = FIRST_LINE_INDENT
        fmt.line_spacing = LINE_SPACING
        fmt.space_before = Pt(6)
        fmt.space_after = Pt(6)
        self._add_runs(paragraph, segment.text, journal)

    def _add_references(self, document, segment: Segment) -> None:
        for entry in content_to_lines(segment.content):
            paragraph = document.add_paragraph(strip_html_tags(entry))
            # Hanging indent
            paragraph.paragraph_format.left_indent = Pt(24)
            paragraph.paragraph_format.first_line_indent = Pt(-24)

    def _add_table(self, document, segment: Segment, journal: Journal) -> None:
        caption = segment.caption_text
        if caption:
            paragraph = document.add_paragraph()
            paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
            paragraph.paragraph_format.space_before = Pt(10)
            run = paragraph.add_run(strip_html_tags(caption))
            run.bold = True

        rows = self._pad_rows(segment.rows)
        if rows:
            self._add_grid(document, rows, journal)
        elif segment.text:
            document.add_paragraph(strip_html_tags(segment.text))

        source = segment.source_text
        if source:
            paragraph = document.add_paragraph()
            paragraph.paragraph_format.space_before = Pt(6)
            run = paragraph.add_run(f"Source: {strip_html_tags(source)}")
            run.font.size = SOURCE_SIZE

    @staticmethod
    def _pad_rows(rows: List[List[str]]) -> List[List[str]]:
        rows = [row for row in rows if row]
        if not rows:
            return []
        width = max(len(row) for row in rows)
        return [row + [""] * (width - len(row)) for row in rows]

    def _add_grid(self, document, rows: List[List[str]], journal: Journal) -> None:
        three_line = journal.rules.use_three_line_table
        table = document.add_table(rows=len(rows), cols=len(rows[0]))
        if not three_line:
            table.style = "Table Grid"

        last = len(rows) - 1
        for r, row in enumerate(rows):
            for c, value in enumerate(row):
                cell = table.cell(r, c)
                paragraph = cell.paragraphs[0]
                paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
                self._add_runs(paragraph, value, journal, size=TABLE_SIZE)
                if three_line:
                    # Top rule, header rule, bottom rule
                    _set_cell_borders(cell, top=r == 0, bottom=r == 0 or r == last)
