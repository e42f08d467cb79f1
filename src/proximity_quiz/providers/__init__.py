"""
Text-generation providers for proximity-quiz

Supports multiple providers with a common interface.
Providers: Perplexity, Claude (Anthropic), Mock
"""

from .base import (
    ModelProvider, ModelResponse, ProviderError, RateLimitError,
    AuthenticationError
)
from .perplexity import PerplexityProvider
from .claude import ClaudeProvider
from .mock import MockProvider, generate_mock_quiz

__all__ = [
    # Base classes and types
    "ModelProvider",
    "ModelResponse",
    "ProviderError",
    "RateLimitError",
    "AuthenticationError",
    # Providers
    "PerplexityProvider",
    "ClaudeProvider",
    "MockProvider",
    "generate_mock_quiz",
    "get_provider",
]


def get_provider(name: str, **kwargs) -> ModelProvider:
    """
    Factory function to get a provider by name.

    Args:
        name: Provider name ('perplexity', 'claude', 'mock')
        **kwargs: Provider-specific options

    Returns:
        Configured ModelProvider instance

    Raises:
        ValueError: If provider name is unknown
    """
    providers = {
        "perplexity": PerplexityProvider,
        "claude": ClaudeProvider,
        "mock": MockProvider,
    }

    if name not in providers:
        raise ValueError(f"Unknown provider: {name}. Valid options: {list(providers.keys())}")

    return providers[name](**kwargs)
