"""Google Gemini client."""

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from finformatter.core.config import ProviderConfig
from finformatter.core.enums import ProviderName
from finformatter.core.prompts import SYSTEM_INSTRUCTION
from finformatter.integrations.base import ProviderClient
from finformatter.utils.exceptions import MalformedResponseError, TransportError
from finformatter.utils.logging import get_logger

logger = get_logger(__name__)


class GeminiClient(ProviderClient):
    """Gemini ``generateContent`` client.

    Unlike the chat completion providers, Gemini gets the instruction and the
    task in a single content block and is asked for a JSON mime type.
    """

    provider = ProviderName.GEMINI.value

    def __init__(self, config: ProviderConfig, timeout: float = 120.0):
        super().__init__(config, timeout)
        self.client = genai.Client(
            api_key=self.api_key,
            http_options=types.HttpOptions(timeout=int(timeout * 1000)),
        )

        logger.debug("gemini_client_initialized", model=self.model)

    async def send(self, prompt: str) -> str:
        logger.info("gemini_request", model=self.model)

        contents = [{"parts": [{"text": f"{SYSTEM_INSTRUCTION}\n\nTask:\n{prompt}"}]}]

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=contents,
                config={"response_mime_type": "application/json"},
            )
        except genai_errors.APIError as e:
            raise TransportError(
                f"gemini returned HTTP {e.code}", status_code=e.code
            ) from e
        except httpx.HTTPError as e:
            # connection errors and timeouts surface unwrapped
            raise TransportError(f"gemini request failed: {e}") from e

        try:
            text = response.candidates[0].content.parts[0].text
        except (AttributeError, IndexError, TypeError) as e:
            raise MalformedResponseError("gemini response has no candidate text") from e

        if not text:
            raise MalformedResponseError("Empty response from gemini")

        usage = getattr(response, "usage_metadata", None)
        logger.info(
            "gemini_response_received",
            model=self.model,
            length=len(text),
            input_tokens=getattr(usage, "prompt_token_count", None),
            output_tokens=getattr(usage, "candidates_token_count", None),
        )

        return text
