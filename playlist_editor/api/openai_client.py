"""
OpenAI text-completion client used for command classification and for
mood/expansion suggestions.
"""

import asyncio
import logging
from typing import Optional
from openai import AsyncOpenAI, OpenAIError
from playlist_editor.api.interfaces import TextCompletion
from playlist_editor.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o"
DEFAULT_TIMEOUT_SECONDS = 30

class OpenAICompletionClient(TextCompletion):
    """Single-turn JSON-mode chat completion."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        temperature: float = 0.2,
        base_url: Optional[str] = None,
        client: Optional[AsyncOpenAI] = None
    ):
        """
        Initialize OpenAI client.

        Args:
            api_key: OpenAI API key
            model: Chat model name
            timeout: Seconds before a completion call is abandoned
            temperature: Sampling temperature
            base_url: Alternative OpenAI-compatible endpoint
            client: Preconfigured AsyncOpenAI instance (tests)

        Raises:
            ValueError: If no API key is given or the timeout is not positive
        """
        if client is None and not api_key:
            raise ValueError("OPENAI_API_KEY must be provided")
        if timeout <= 0:
            raise ValueError("timeout must be positive")

        # Retries belong to the caller
        self.client = client or AsyncOpenAI(api_key=api_key, base_url=base_url, max_retries=0)
        self.model = model
        self.timeout = timeout
        self.temperature = temperature

    async def complete(self, system_instructions: str, user_text: str) -> str:
        """Send one system + user message pair and return the reply text."""
        try:
            response = await asyncio.wait_for(
                self.client.chat.completions.create(
                    model=self.model,
                    messages=[
                        {"role": "system", "content": system_instructions},
                        {"role": "user", "content": user_text}
                    ],
                    response_format={"type": "json_object"},
                    temperature=self.temperature,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.error(f"OpenAI completion timed out after {self.timeout}s")
            raise ExternalServiceError(f"Completion request timed out after {self.timeout}s")
        except OpenAIError as e:
            logger.error(f"OpenAI completion failed: {e}")
            raise ExternalServiceError(f"Completion request failed: {e}") from e

        if not response.choices:
            raise ExternalServiceError("Completion response contained no choices")

        content = response.choices[0].message.content
        if not content:
            raise ExternalServiceError("Completion response was empty")

        return content
