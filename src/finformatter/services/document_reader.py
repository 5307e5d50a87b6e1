"""Paper text import from local files."""

from pathlib import Path
from typing import List

from docx import Document
from docx.opc.exceptions import PackageNotFoundError

from finformatter.utils.exceptions import DocumentImportError
from finformatter.utils.logging import get_logger

logger = get_logger(__name__)

TEXT_SUFFIXES = {".txt", ".md", ".markdown"}
DOCX_SUFFIXES = {".docx"}


def read_paper_text(path: Path) -> str:
    """Read paper text from a plain text or Word file.

    Args:
        path: Source file (.txt, .md or .docx).

    Returns:
        Extracted text; Word tables become tab-separated rows.

    Raises:
        DocumentImportError: If the file is missing, unsupported or unreadable.
    """
    path = Path(path)
    if not path.is_file():
        raise DocumentImportError(f"File not found: {path}")

    suffix = path.suffix.lower()

    if suffix in TEXT_SUFFIXES:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentImportError(f"Could not read {path}: {e}") from e
    elif suffix in DOCX_SUFFIXES:
        text = _read_docx(path)
    else:
        raise DocumentImportError(
            f"Unsupported file type {suffix or '(none)'}; use .txt, .md or .docx"
        )

    logger.info("document_imported", path=str(path), characters=len(text))
    return text


def _read_docx(path: Path) -> str:
    try:
        document = Document(str(path))
    except (PackageNotFoundError, ValueError, KeyError) as e:
        raise DocumentImportError(f"Not a valid Word document: {path}") from e

    blocks: List[str] = [p.text for p in document.paragraphs if p.text.strip()]

    for table in document.tables:
        rows = ["\t".join(cell.text.strip() for cell in row.cells) for row in table.rows]
        blocks.append("\n".join(row for row in rows if row.strip()))

    return "\n".join(block for block in blocks if block)
