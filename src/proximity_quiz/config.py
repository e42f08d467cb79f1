"""
proximity-quiz configuration

All thresholds, model choices, and server settings live here.
Environment variables override defaults for deployment flexibility.
"""

import os
from dataclasses import dataclass, field
from typing import Literal


@dataclass
class TrackerConfig:
    """When a user counts as dwelling somewhere"""
    proximity_radius_m: float = float(os.getenv("PROXIMITY_RADIUS_M", "50.0"))
    dwell_minutes: float = float(os.getenv("DWELL_MINUTES", "10.0"))
    state_ttl_seconds: float = float(os.getenv("STATE_TTL_SECONDS", "0"))  # 0 = keep forever


@dataclass
class GenerationConfig:
    """Quiz text generation"""
    provider: Literal["perplexity", "claude", "mock"] = os.getenv("QUIZ_PROVIDER", "perplexity")
    model: str = os.getenv("QUIZ_MODEL", "")  # Empty = use provider default
    question_count: int = int(os.getenv("QUIZ_QUESTION_COUNT", "5"))
    max_tokens: int = int(os.getenv("QUIZ_MAX_TOKENS", "500"))
    temperature: float = float(os.getenv("QUIZ_TEMPERATURE", "0.7"))
    request_timeout_seconds: float = float(os.getenv("QUIZ_REQUEST_TIMEOUT", "60.0"))

    # Default models per provider
    PROVIDER_DEFAULTS = {
        "perplexity": "llama-3.1-sonar-small-128k-online",
        "claude": "claude-sonnet-4-20250514",
        "mock": "mock-model-v1",
    }

    def get_model(self) -> str:
        """Get model, falling back to provider default."""
        return self.model or self.PROVIDER_DEFAULTS.get(self.provider, "")


@dataclass
class ServerConfig:
    """HTTP server binding"""
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))


@dataclass
class Config:
    """Master config - import this"""
    tracker: TrackerConfig = field(default_factory=TrackerConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    @classmethod
    def test_mode(cls) -> "Config":
        """For development/testing: mock provider, no network calls"""
        cfg = cls()
        cfg.generation.provider = "mock"
        cfg.generation.model = ""
        return cfg


# Singleton
config = Config()
