"""List journals command."""

from typing import Optional

import click

from finformatter.cli.commands.common import load_catalog, load_config, resolve_journal


@click.command()
@click.option("--show", "journal_id", default=None, help="Show the full rule set of one journal")
def journals(journal_id: Optional[str]) -> None:
    """List target journals and their formatting rules.

    Examples:
        finformatter journals
        finformatter journals --show jfr
    """
    config = load_config()
    catalog = load_catalog(config)

    if not journal_id:
        for journal in catalog:
            marker = "*" if journal.id == catalog.get(config.default_journal).id else " "
            click.echo(f"{marker} {journal.id:<8} {journal.name}")
        return

    journal = resolve_journal(catalog, journal_id, config.default_journal)
    rules = journal.rules

    click.echo(f"{journal.name} ({journal.id})")
    click.echo("=" * 50)
    click.echo(f"Title limit:      {rules.title_limit}")
    click.echo(f"Abstract limit:   {rules.abstract_limit}")
    click.echo(f"Headings:         {' / '.join(rules.heading_sequence)}")
    click.echo(f"Font:             {rules.font}")
    click.echo(f"Citation style:   {rules.citation}")
    click.echo(f"Three-line table: {'yes' if rules.use_three_line_table else 'no'}")
    click.echo(f"Italic variables: {'yes' if rules.variable_italic else 'no'}")

    for label, value in (
        ("References", rules.references_rule),
        ("Tables/figures", rules.table_fig_rule),
        ("Math", rules.math_rule),
        ("Footnotes", rules.footnote_rule),
        ("Other", rules.other_rule),
    ):
        if value:
            click.echo(f"{label}: {value}")
