"""Provider settings commands."""

import click

from finformatter.cli.commands.common import load_config
from finformatter.core.enums import ProviderName
from finformatter.services.config_store import SettingsFileStore
from finformatter.utils.exceptions import ConfigurationError
from finformatter.utils.text_utils import mask_secret

PROVIDER_CHOICE = click.Choice([p.value for p in ProviderName], case_sensitive=False)


def _store() -> SettingsFileStore:
    config = load_config()
    try:
        return SettingsFileStore(config.settings_file, config)
    except ConfigurationError as e:
        click.echo(f"❌ {e}", err=True)
        raise click.Abort()


def _update(action, *args) -> None:
    try:
        action(*args)
    except ConfigurationError as e:
        click.echo(f"❌ {e}", err=True)
        raise click.Abort()


@click.group()
def providers() -> None:
    """Manage AI providers (API keys, models, fallback order)."""


@providers.command("list")
def list_providers() -> None:
    """Show providers in fallback order."""
    store = _store()

    click.echo(f"Settings: {store.path}")
    click.echo("=" * 50)
    for position, config in enumerate(store.get_provider_configs(), start=1):
        if config.is_active:
            state = "active"
        elif config.enabled:
            state = "enabled, no API key"
        else:
            state = "disabled"
        key = mask_secret(config.api_key) or "-"
        click.echo(f"{position}. {config.provider:<9} {config.model_name:<22} {key:<16} {state}")


@providers.command("set-key")
@click.argument("provider", type=PROVIDER_CHOICE)
@click.option("--key", prompt=True, hide_input=True, help="API key (prompted if omitted)")
def set_key(provider: str, key: str) -> None:
    """Store the API key of PROVIDER."""
    store = _store()
    _update(store.set_api_key, provider, key)
    click.echo(f"✓ API key saved for {provider.lower()}")


@providers.command()
@click.argument("provider", type=PROVIDER_CHOICE)
def enable(provider: str) -> None:
    """Include PROVIDER in the fallback chain."""
    store = _store()
    _update(store.set_enabled, provider, True)
    click.echo(f"✓ {provider.lower()} enabled")


@providers.command()
@click.argument("provider", type=PROVIDER_CHOICE)
def disable(provider: str) -> None:
    """Skip PROVIDER during analysis."""
    store = _store()
    _update(store.set_enabled, provider, False)
    click.echo(f"✓ {provider.lower()} disabled")


@providers.command("set-model")
@click.argument("provider", type=PROVIDER_CHOICE)
@click.argument("model_name")
def set_model(provider: str, model_name: str) -> None:
    """Change the model used for PROVIDER."""
    store = _store()
    _update(store.set_model, provider, model_name)
    click.echo(f"✓ {provider.lower()} now uses {model_name.strip()}")
