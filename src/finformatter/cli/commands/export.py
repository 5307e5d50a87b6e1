"""Export saved result command."""

from pathlib import Path
from typing import Optional

import click

from finformatter.cli.commands.common import (
    load_catalog,
    load_config,
    render_result,
    resolve_journal,
    write_output,
)
from finformatter.core.enums import OutputFormat
from finformatter.pipeline.formatters import JSONFormatter
from finformatter.pipeline.sanitizer import ResponseSanitizer
from finformatter.services.docx_exporter import DocxExporter
from finformatter.utils.exceptions import ExportError, MalformedResponseError
from finformatter.utils.logging import get_logger

logger = get_logger(__name__)


@click.command()
@click.argument("result_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--journal", "journal_id", default=None, help="Target journal (default: from file)")
@click.option(
    "--docx",
    "docx_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Word document path (default: auto-generated in OUTPUT_DIR)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat]),
    default=None,
    help="Render a preview instead of a Word document",
)
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), default=None)
def export(
    result_file: Path,
    journal_id: Optional[str],
    docx_path: Optional[Path],
    output_format: Optional[str],
    output: Optional[Path],
) -> None:
    """Export a saved JSON result to Word or another preview format.

    Examples:
        finformatter analyze paper.md --format json --output result.json
        finformatter export result.json
        finformatter export result.json --journal aer --docx paper.docx
        finformatter export result.json --format html --output preview.html
    """
    config = load_config()
    catalog = load_catalog(config)

    try:
        saved = JSONFormatter.load(result_file.read_text(encoding="utf-8"))
        result = ResponseSanitizer.validate(saved["result"])
    except (ValueError, MalformedResponseError) as e:
        click.echo(f"❌ {result_file} is not a valid analysis result: {e}", err=True)
        raise click.Abort()

    journal = resolve_journal(catalog, journal_id or saved["journal"], config.default_journal)

    if output_format:
        write_output(render_result(result, journal, OutputFormat(output_format)), output)
        return

    try:
        path = DocxExporter(config.output_dir).export(result.segments, journal, docx_path)
    except ExportError as e:
        click.echo(f"❌ Export failed: {e}", err=True)
        logger.error("export_failed", error=str(e))
        raise click.Abort()

    click.echo(f"✓ Exported {journal.name} document to {path}")
