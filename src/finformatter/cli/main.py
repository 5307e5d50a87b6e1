"""Command-line interface for FinFormatter."""

import click

from finformatter.__version__ import __version__
from finformatter.cli.commands import analyze, export, journals, providers


@click.group()
@click.version_option(version=__version__, prog_name="finformatter")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """FinFormatter - AI-assisted journal formatting for finance papers.

    Reformats a paper draft to the layout rules of a target journal using a
    chain of AI providers (GLM, DeepSeek, Gemini) with automatic fallback.
    """
    ctx.ensure_object(dict)


# Register commands
cli.add_command(analyze)
cli.add_command(export)
cli.add_command(journals)
cli.add_command(providers)


def main() -> None:
    """Main entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
