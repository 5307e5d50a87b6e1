"""Provider client interface."""

from abc import ABC, abstractmethod

from finformatter.core.config import ProviderConfig


class ProviderClient(ABC):
    """Sends one composed prompt to one AI provider and returns its raw text.

    Implementations make exactly one network call per :meth:`send` and never
    retry; fallback across providers is the orchestrator's job.
    """

    #: Provider tag this client serves, set by each subclass.
    provider: str = ""

    def __init__(self, config: ProviderConfig, timeout: float = 120.0):
        """Initialize client.

        Args:
            config: Provider entry (credential is used as captured here).
            timeout: Network timeout in seconds.
        """
        self.config = config
        self.api_key = config.api_key.strip()
        self.model = config.model_name
        self.timeout = timeout

    @abstractmethod
    async def send(self, prompt: str) -> str:
        """Send prompt and return the provider's raw text payload.

        Raises:
            TransportError: If the HTTP call does not succeed.
            MalformedResponseError: If the response has no generated text.
        """
