"""AI provider integrations."""

from finformatter.integrations.base import ProviderClient
from finformatter.integrations.chat_completion_client import (
    ChatCompletionClient,
    DeepSeekClient,
    GLMClient,
)
from finformatter.integrations.gemini_client import GeminiClient
from finformatter.integrations.provider_factory import (
    PROVIDER_CLIENTS,
    ClientFactory,
    create_provider_client,
    resolve_provider,
)

__all__ = [
    "ProviderClient",
    "ChatCompletionClient",
    "DeepSeekClient",
    "GLMClient",
    "GeminiClient",
    "PROVIDER_CLIENTS",
    "ClientFactory",
    "create_provider_client",
    "resolve_provider",
]
