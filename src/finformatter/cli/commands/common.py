"""Helpers shared by CLI commands."""

from pathlib import Path
from typing import Optional

import click

from finformatter.core.catalog import RuleCatalog
from finformatter.core.config import Config
from finformatter.core.enums import OutputFormat
from finformatter.core.paper import AnalysisResult, Journal
from finformatter.pipeline.formatters import (
    HtmlPreviewFormatter,
    JSONFormatter,
    MarkdownFormatter,
    PlainTextFormatter,
)
from finformatter.services.config_loader import load_journal_catalog
from finformatter.utils.exceptions import FinFormatterError
from finformatter.utils.logging import setup_logging


def load_config() -> Config:
    """Load configuration and set up logging, aborting on invalid settings."""
    try:
        config = Config()  # type: ignore
        config.validate_paths()
    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        click.echo("Please check your .env file and environment variables.", err=True)
        raise click.Abort()

    setup_logging(log_level=config.log_level, log_format=config.log_format, log_dir=config.log_dir)  # type: ignore[arg-type]
    return config


def load_catalog(config: Config) -> RuleCatalog:
    try:
        return load_journal_catalog(config.journals_file)
    except FinFormatterError as e:
        click.echo(f"Error loading journal catalog: {e}", err=True)
        raise click.Abort()


def resolve_journal(catalog: RuleCatalog, journal_id: Optional[str], default_id: str) -> Journal:
    """Strict lookup for user-typed ids; the configured default otherwise."""
    if journal_id:
        journal = catalog.find(journal_id)
        if journal is None:
            raise click.BadParameter(
                f"Unknown journal {journal_id!r}. Available: {', '.join(catalog.ids())}",
                param_hint="--journal",
            )
        return journal
    return catalog.get(default_id)


def render_result(result: AnalysisResult, journal: Journal, output_format: OutputFormat) -> str:
    if output_format == OutputFormat.JSON:
        return JSONFormatter().format(result, journal)
    if output_format == OutputFormat.HTML:
        return HtmlPreviewFormatter().format(result, journal)
    if output_format == OutputFormat.TEXT:
        return PlainTextFormatter().format(result)
    return MarkdownFormatter().format(result, journal)


def write_output(content: str, output: Optional[Path]) -> None:
    """Write to a file, or stdout when no path is given."""
    if output is None:
        click.echo(content)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    click.echo(f"✓ Wrote {output.stat().st_size:,} bytes to {output}", err=True)
