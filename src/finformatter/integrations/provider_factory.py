"""Provider client registry."""

from typing import Callable, Dict, Type

from finformatter.core.config import ProviderConfig
from finformatter.core.enums import ProviderName
from finformatter.integrations.base import ProviderClient
from finformatter.integrations.chat_completion_client import DeepSeekClient, GLMClient
from finformatter.integrations.gemini_client import GeminiClient
from finformatter.utils.exceptions import UnsupportedProviderError
from finformatter.utils.logging import get_logger

logger = get_logger(__name__)

#: One entry per supported provider. Adding a provider means adding a
#: ProviderClient subclass here; the orchestrator does not change.
PROVIDER_CLIENTS: Dict[ProviderName, Type[ProviderClient]] = {
    ProviderName.GLM: GLMClient,
    ProviderName.DEEPSEEK: DeepSeekClient,
    ProviderName.GEMINI: GeminiClient,
}

ClientFactory = Callable[[ProviderConfig, float], ProviderClient]


def resolve_provider(provider: str) -> ProviderName:
    """Map a provider tag to a known provider.

    Raises:
        UnsupportedProviderError: If the tag is not a known provider.
    """
    try:
        return ProviderName(provider.strip().lower())
    except ValueError as e:
        raise UnsupportedProviderError(provider) from e


def create_provider_client(config: ProviderConfig, timeout: float = 120.0) -> ProviderClient:
    """Create the client for a provider entry.

    Args:
        config: Provider entry.
        timeout: Network timeout in seconds.

    Returns:
        Client instance.

    Raises:
        UnsupportedProviderError: If the provider has no registered client.
    """
    name = resolve_provider(config.provider)
    client_class = PROVIDER_CLIENTS.get(name)
    if client_class is None:
        raise UnsupportedProviderError(config.provider)

    logger.debug("provider_client_created", provider=name.value, model=config.model_name)
    return client_class(config, timeout=timeout)
