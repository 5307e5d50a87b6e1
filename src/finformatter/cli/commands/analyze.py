"""Analyze paper command."""

import asyncio
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
from finformatter.core.enums import InputMode, OutputFormat
from finformatter.pipeline.orchestrator import FallbackOrchestrator
from finformatter.services.analysis_service import PaperAnalysisService
from finformatter.services.config_store import SettingsFileStore
from finformatter.services.docx_exporter import DocxExporter
from finformatter.services.document_reader import read_paper_text
from finformatter.utils.exceptions import (
    AllProvidersFailedError,
    DocumentImportError,
    ExportError,
    FinFormatterError,
    InputTooShortError,
    NoActiveProviderError,
)
from finformatter.utils.logging import get_logger

logger = get_logger(__name__)


@click.command()
@click.argument(
    "file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=False,
)
@click.option("--text", "text", default=None, help="Paper text (instead of FILE)")
@click.option("--journal", "journal_id", default=None, help="Target journal id (see 'journals')")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in InputMode]),
    default=InputMode.FULL.value,
    help="Full paper or an excerpt",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.MARKDOWN.value,
    help="Preview format",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write preview to file (default: stdout)",
)
@click.option("--docx", "docx", is_flag=True, help="Also export a Word document to OUTPUT_DIR")
def analyze(
    file: Optional[Path],
    text: Optional[str],
    journal_id: Optional[str],
    mode: str,
    output_format: str,
    output: Optional[Path],
    docx: bool,
) -> None:
    """Reformat a paper for a target journal.

    Examples:
        finformatter analyze paper.docx --journal jfr
        finformatter analyze draft.md --format html --output preview.html
        finformatter analyze --text "..." --mode snippet
    """
    if file and text:
        raise click.UsageError("Give either FILE or --text, not both")
    if not file and text is None:
        raise click.UsageError("Give a FILE or --text")

    config = load_config()
    catalog = load_catalog(config)
    journal = resolve_journal(catalog, journal_id, config.default_journal)

    if file:
        try:
            text = read_paper_text(file)
        except DocumentImportError as e:
            click.echo(f"❌ {e}", err=True)
            raise click.Abort()

    service = PaperAnalysisService(
        store=SettingsFileStore(config.settings_file, config),
        catalog=catalog,
        orchestrator=FallbackOrchestrator(attempt_timeout=config.request_timeout_sec),
        min_text_length=config.min_text_length,
    )

    click.echo(f"Analyzing for {journal.name} ({mode} mode)...", err=True)

    try:
        result = asyncio.run(service.analyze(text or "", journal, InputMode(mode)))
    except KeyboardInterrupt:
        click.echo("\n\n⚠ Analysis cancelled by user", err=True)
        raise click.Abort()
    except InputTooShortError as e:
        click.echo(f"❌ {e}", err=True)
        raise click.Abort()
    except NoActiveProviderError as e:
        click.echo(f"❌ {e}", err=True)
        click.echo("Use 'finformatter providers set-key' and 'providers enable'.", err=True)
        raise click.Abort()
    except AllProvidersFailedError as e:
        click.echo(f"❌ {e}", err=True)
        for failure in e.failures:
            status = f" [{failure.status_code}]" if failure.status_code else ""
            click.echo(
                f"  - {failure.provider} ({failure.model_name}): "
                f"{failure.error_type}{status}: {failure.reason}",
                err=True,
            )
        raise click.Abort()
    except FinFormatterError as e:
        click.echo(f"❌ Analysis failed: {e}", err=True)
        logger.error("analysis_command_failed", error=str(e))
        raise click.Abort()

    write_output(render_result(result, journal, OutputFormat(output_format)), output)

    if docx:
        try:
            path = DocxExporter(config.output_dir).export(result.segments, journal)
        except ExportError as e:
            click.echo(f"❌ {e}", err=True)
            raise click.Abort()
        click.echo(f"✓ Word document: {path}", err=True)
