"""Provider configuration stores.

The analysis service reads provider entries through a :class:`ConfigStore`
at call time instead of from global state, so the fallback chain can be
driven by a persisted settings file in the CLI and by fixed lists in tests.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol

from finformatter.core.config import Config, ProviderConfig
from finformatter.core.enums import ProviderName
from finformatter.services.config_loader import load_yaml, save_yaml
from finformatter.utils.exceptions import ConfigurationError
from finformatter.utils.logging import get_logger

logger = get_logger(__name__)


class ConfigStore(Protocol):
    """Source of provider entries in fallback order."""

    def get_provider_configs(self) -> List[ProviderConfig]: ...


class StaticConfigStore:
    """In-memory store over a fixed list of provider entries."""

    def __init__(self, configs: Iterable[ProviderConfig]):
        self._configs = list(configs)

    def get_provider_configs(self) -> List[ProviderConfig]:
        return [config.model_copy() for config in self._configs]


class SettingsFileStore:
    """Provider settings persisted as YAML, layered over environment defaults.

    File layout::

        providers:
          glm:
            api_key: ...
            enabled: true
            model_name: glm-4-flash

    Values in the file win over ``Config`` (environment / ``.env``) values.
    """

    def __init__(self, path: Path, config: Optional[Config] = None):
        """Initialize store.

        Args:
            path: Settings file; missing file means "no overrides yet".
            config: Application config supplying defaults and provider order.
        """
        self.path = Path(path)
        self.config = config or Config()  # type: ignore[call-arg]
        self._overrides: Dict[str, Dict[str, Any]] = self._load()

    def _load(self) -> Dict[str, Dict[str, Any]]:
        if not self.path.exists():
            return {}

        providers = load_yaml(self.path).get("providers") or {}
        if not isinstance(providers, dict):
            raise ConfigurationError(f"'providers' must be a mapping in {self.path}")

        overrides = {}
        for name, values in providers.items():
            if not isinstance(values, dict):
                raise ConfigurationError(f"Invalid settings for provider {name!r} in {self.path}")
            enabled = values.get("enabled")
            if enabled is not None and not isinstance(enabled, bool):
                raise ConfigurationError(
                    f"'enabled' for provider {name!r} must be true or false in {self.path}"
                )
            overrides[str(name).lower()] = dict(values)

        logger.debug("settings_loaded", path=str(self.path), providers=list(overrides))
        return overrides

    def get_provider_configs(self) -> List[ProviderConfig]:
        """Provider entries in ``Config.provider_order``; unknown names are kept.

        Unknown names stay in the list so the orchestrator reports them as
        unsupported instead of silently dropping them.
        """
        defaults = self.config.provider_defaults()
        configs = []

        for name in self.config.provider_order:
            base = defaults.get(name)
            values = self._overrides.get(name, {})

            if base is None:
                if not values:
                    logger.warning("provider_without_settings", provider=name)
                    continue
                base = ProviderConfig(provider=name, model_name=values.get("model_name", name))

            configs.append(base.model_copy(update=self._clean(values)))

        return configs

    @staticmethod
    def _clean(values: Dict[str, Any]) -> Dict[str, Any]:
        update: Dict[str, Any] = {}
        if values.get("api_key") is not None:
            update["api_key"] = str(values["api_key"])
        if values.get("enabled") is not None:
            update["enabled"] = values["enabled"]
        if values.get("model_name"):
            update["model_name"] = str(values["model_name"])
        return update

    def set_api_key(self, provider: str, api_key: str) -> None:
        self._set(provider, "api_key", api_key.strip())

    def set_enabled(self, provider: str, enabled: bool) -> None:
        self._set(provider, "enabled", enabled)

    def set_model(self, provider: str, model_name: str) -> None:
        if not model_name.strip():
            raise ConfigurationError("Model name must not be empty")
        self._set(provider, "model_name", model_name.strip())

    def _set(self, provider: str, key: str, value: Any) -> None:
        name = self._known(provider)
        self._overrides.setdefault(name, {})[key] = value
        self.save()
        logger.info("provider_setting_updated", provider=name, setting=key)

    @staticmethod
    def _known(provider: str) -> str:
        try:
            return ProviderName(provider.strip().lower()).value
        except ValueError as e:
            known = ", ".join(p.value for p in ProviderName)
            raise ConfigurationError(f"Unknown provider {provider!r} (known: {known})") from e

    def save(self) -> None:
        """Write current overrides to the settings file."""
        save_yaml({"providers": self._overrides}, self.path)
        try:
            # API keys in plain text, keep the file private
            self.path.chmod(0o600)
        except OSError as e:
            logger.warning("settings_chmod_failed", path=str(self.path), error=str(e))
