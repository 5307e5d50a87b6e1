"""CLI commands for FinFormatter."""

from finformatter.cli.commands.analyze import analyze
from finformatter.cli.commands.export import export
from finformatter.cli.commands.journals import journals
from finformatter.cli.commands.providers import providers

__all__ = ["analyze", "export", "journals", "providers"]
