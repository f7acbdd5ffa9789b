from openai import AsyncOpenAI, APIStatusError, APIConnectionError, OpenAIError
from typing import Dict, Any, List, Optional
import logging

from deckpilot.config import Settings, settings as default_settings
from deckpilot.errors import UpstreamError, NetworkError

logger = logging.getLogger(__name__)

class OpenRouterClient:
    """Chat completion client for the OpenRouter endpoint.

    Makes exactly one outbound request per ``complete`` call. Retries are the
    caller's business, so the SDK's own retry loop is disabled.
    """

    def __init__(self, settings: Optional[Settings] = None, client: Optional[AsyncOpenAI] = None):
        self.settings = settings or default_settings
        self.client = client
        if self.client is None:
            self.initialize_client()

    def initialize_client(self) -> None:
        """Initialize the AsyncOpenAI client against the OpenRouter base URL."""
        if not self.settings.OPENROUTER_API_KEY:
            logger.warning("OPENROUTER_API_KEY is not set; upstream calls will be rejected")

        self.client = AsyncOpenAI(
            api_key=self.settings.OPENROUTER_API_KEY,
            base_url=self.settings.OPENROUTER_BASE_URL,
            timeout=self.settings.UPSTREAM_TIMEOUT,
            max_retries=0,
            default_headers={
                "HTTP-Referer": self.settings.FRONTEND_URL,
                "X-Title": self.settings.APP_TITLE,
            },
        )
        logger.info(f"OpenRouter client initialized with model: {self.settings.OPENROUTER_MODEL}")

    def get_client(self) -> AsyncOpenAI:
        """Get the underlying client instance."""
        if not self.client:
            self.initialize_client()
        return self.client

    async def complete(self, messages: List[Dict[str, str]], max_tokens: int) -> str:
        """Send a chat completion request and return the raw message text.

        Raises:
            UpstreamError: the endpoint returned a non-success status or no content.
            NetworkError: the request failed in transport or timed out.
        """
        try:
            response = await self.get_client().chat.completions.create(
                model=self.settings.OPENROUTER_MODEL,
                messages=messages,
                max_tokens=max_tokens,
                temperature=self.settings.TEMPERATURE,
                top_p=self.settings.TOP_P,
                frequency_penalty=self.settings.FREQUENCY_PENALTY,
                presence_penalty=self.settings.PRESENCE_PENALTY,
            )
        except APIStatusError as e:
            logger.error(f"OpenRouter API Error: {e.status_code} {e.message}")
            raise UpstreamError(
                status=e.status_code,
                status_text=getattr(e.response, "reason_phrase", "") or "",
                body=e.response.text if e.response is not None else str(e.body),
            ) from e
        except APIConnectionError as e:
            # APITimeoutError is a subclass and lands here too
            logger.error(f"OpenRouter transport error: {e}")
            raise NetworkError(str(e)) from e
        except OpenAIError as e:
            logger.error(f"OpenRouter client error: {e}")
            raise UpstreamError(status=502, status_text="Bad Gateway", body=str(e)) from e

        if not response.choices or not response.choices[0].message.content:
            raise UpstreamError(status=502, status_text="Bad Gateway", body="No content in completion response")

        return response.choices[0].message.content

    def get_current_provider_info(self) -> Dict[str, Any]:
        """Get current provider information."""
        return {
            "provider": "openrouter",
            "model": self.settings.OPENROUTER_MODEL,
            "base_url": self.settings.OPENROUTER_BASE_URL,
            "timeout": self.settings.UPSTREAM_TIMEOUT,
            "max_tokens": self.settings.GENERATION_MAX_TOKENS,
            "temperature": self.settings.TEMPERATURE,
        }
