"""
Claude (Anthropic) provider implementation

Alternative quiz text source through the Anthropic messages API.
"""

import os
from typing import Optional

from .base import (
    ModelProvider, ModelResponse, ProviderError, RateLimitError,
    AuthenticationError
)


def map_claude_error(error: Exception) -> ProviderError:
    """Translate an SDK exception into the provider error hierarchy."""
    text = str(error).lower()
    if "429" in text or "rate" in text:
        return RateLimitError(f"Claude rate limit exceeded: {error}")
    if "401" in text or "auth" in text or "api key" in text:
        return AuthenticationError(f"Claude authentication failed: {error}")
    return ProviderError(f"Claude API error: {error}")


class ClaudeProvider(ModelProvider):
    """
    Quiz text from Claude.

    API key comes from the constructor or ANTHROPIC_API_KEY. The SDK is
    imported on first use so the mock and Perplexity paths never need it.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        default_model: str = "claude-sonnet-4-20250514",
    ):
        self._api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        self._default_model = default_model
        self._client = None

    def _get_client(self):
        if self._client is None:
            if not self._api_key:
                raise AuthenticationError(
                    "No Anthropic API key provided. Set ANTHROPIC_API_KEY or pass api_key to constructor."
                )
            import anthropic
            self._client = anthropic.AsyncAnthropic(api_key=self._api_key)
        return self._client

    @property
    def name(self) -> str:
        return "claude"

    @property
    def default_model(self) -> str:
        return self._default_model

    def _build_request(
        self,
        prompt: str,
        system: Optional[str],
        model: str,
        max_tokens: int,
        temperature: Optional[float],
    ) -> dict:
        request = {
            "model": model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        # The quiz system prompt goes in the top-level field, not a message
        if system:
            request["system"] = system
        if temperature is not None:
            request["temperature"] = min(1.0, max(0.0, temperature))
        return request

    async def generate(
        self,
        prompt: str,
        *,
        system: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: int = 500,
        temperature: float = 0.7,
        **kwargs
    ) -> ModelResponse:
        """Generate quiz text with Claude; text blocks are concatenated."""
        client = self._get_client()
        request = self._build_request(
            prompt, system, model or self._default_model, max_tokens, temperature
        )

        try:
            message = await client.messages.create(**request)
        except Exception as e:
            raise map_claude_error(e)

        text = "".join(getattr(block, "text", "") for block in message.content)
        usage = {}
        if getattr(message, "usage", None) is not None:
            usage = {
                "input_tokens": message.usage.input_tokens,
                "output_tokens": message.usage.output_tokens,
            }

        return ModelResponse(
            content=text,
            model=message.model,
            provider=self.name,
            usage=usage,
            raw_response=message,
        )

    async def close(self):
        if self._client is not None:
            await self._client.close()
            self._client = None
