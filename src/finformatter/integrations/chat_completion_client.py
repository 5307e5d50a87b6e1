"""OpenAI-compatible chat completion clients (DeepSeek, Zhipu GLM)."""

import openai
from openai import AsyncOpenAI

from finformatter.core.config import ProviderConfig
from finformatter.core.enums import ProviderName
from finformatter.core.prompts import SYSTEM_INSTRUCTION
from finformatter.integrations.base import ProviderClient
from finformatter.utils.exceptions import MalformedResponseError, TransportError
from finformatter.utils.logging import get_logger

logger = get_logger(__name__)


class ChatCompletionClient(ProviderClient):
    """Client for providers exposing the OpenAI chat completions API.

    Sends a system + user message pair and asks for a JSON object response.
    The API key travels as a bearer token.
    """

    base_url: str = ""

    def __init__(self, config: ProviderConfig, timeout: float = 120.0):
        super().__init__(config, timeout)
        # Fallback happens across providers, never inside the SDK
        self.client = AsyncOpenAI(
            api_key=self.api_key,
            base_url=self.base_url,
            timeout=timeout,
            max_retries=0,
        )

        logger.debug(
            "chat_client_initialized",
            provider=self.provider,
            base_url=self.base_url,
            model=self.model,
        )

    async def send(self, prompt: str) -> str:
        logger.info("chat_request", provider=self.provider, model=self.model)

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_INSTRUCTION},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
            )
        except openai.APIStatusError as e:
            raise TransportError(
                f"{self.provider} returned HTTP {e.status_code}",
                status_code=e.status_code,
            ) from e
        except openai.APIError as e:
            # Connection failures and timeouts carry no status
            raise TransportError(f"{self.provider} request failed: {e}") from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise MalformedResponseError(
                f"{self.provider} response has no message content"
            ) from e

        if not content:
            raise MalformedResponseError(f"Empty response from {self.provider}")

        usage = getattr(response, "usage", None)
        logger.info(
            "chat_response_received",
            provider=self.provider,
            model=self.model,
            length=len(content),
            input_tokens=getattr(usage, "prompt_tokens", None),
            output_tokens=getattr(usage, "completion_tokens", None),
        )

        return content


class DeepSeekClient(ChatCompletionClient):
    """DeepSeek chat completions."""

    provider = ProviderName.DEEPSEEK.value
    base_url = "https://api.deepseek.com/v1"


class GLMClient(ChatCompletionClient):
    """Zhipu GLM (open.bigmodel.cn) chat completions."""

    provider = ProviderName.GLM.value
    base_url = "https://open.bigmodel.cn/api/paas/v4"
