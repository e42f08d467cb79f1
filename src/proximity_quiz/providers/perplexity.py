"""
Perplexity provider implementation

Calls the OpenAI-style chat completions endpoint over plain HTTP.
"""

import os
from typing import Optional

import httpx

from ..config import config
from .base import (
    ModelProvider, ModelResponse, ProviderError, RateLimitError,
    AuthenticationError
)


class PerplexityProvider(ModelProvider):
    """
    Perplexity chat completions provider.

    API key is read from:
    1. Constructor argument
    2. PERPLEXITY_API_KEY environment variable
    """

    BASE_URL = "https://api.perplexity.ai"

    def __init__(
        self,
        api_key: Optional[str] = None,
        default_model: str = "llama-3.1-sonar-small-128k-online",
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize Perplexity provider.

        Args:
            api_key: Perplexity API key (falls back to env var)
            default_model: Default model to use
            base_url: API base URL (defaults to Perplexity's API)
            timeout: Request timeout in seconds
        """
        self._api_key = api_key or os.getenv("PERPLEXITY_API_KEY")
        self._default_model = default_model
        self._base_url = (base_url or self.BASE_URL).rstrip("/")
        self._timeout = timeout if timeout is not None else config.generation.request_timeout_seconds
        self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        """Lazy initialization of HTTP client."""
        if self._client is None:
            if not self._api_key:
                raise AuthenticationError(
                    "No Perplexity API key provided. Set PERPLEXITY_API_KEY or pass api_key to constructor."
                )
            self._client = httpx.AsyncClient(
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self._timeout,
            )
        return self._client

    @property
    def name(self) -> str:
        return "perplexity"

    @property
    def default_model(self) -> str:
        return self._default_model

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
        """Generate a response using Perplexity chat completions."""
        client = self._get_client()
        model = model or self._default_model

        try:
            messages = []
            if system:
                messages.append({"role": "system", "content": system})
            messages.append({"role": "user", "content": prompt})

            payload = {
                "model": model,
                "messages": messages,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }

            response = await client.post(f"{self._base_url}/chat/completions", json=payload)
            response.raise_for_status()
            data = response.json()

            choices = data.get("choices") or []
            if not choices:
                raise ProviderError("Perplexity API error: response contained no choices")
            content = (choices[0].get("message") or {}).get("content") or ""

            usage = {}
            if data.get("usage"):
                usage = {
                    "input_tokens": data["usage"].get("prompt_tokens", 0),
                    "output_tokens": data["usage"].get("completion_tokens", 0),
                }

            return ModelResponse(
                content=content,
                model=data.get("model", model),
                provider=self.name,
                usage=usage,
                raw_response=data,
            )

        except ProviderError:
            raise
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 429:
                raise RateLimitError(f"Perplexity rate limit exceeded: {e}")
            if e.response.status_code == 401:
                raise AuthenticationError(f"Perplexity authentication failed: {e}")
            raise ProviderError(f"API call failed with status {e.response.status_code}")
        except Exception as e:
            raise ProviderError(f"Perplexity API error: {e}")

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
