"""
Mock provider for testing

Returns configurable responses without making API calls.
"""

import random
import re
from dataclasses import dataclass
from typing import Optional, Callable

from .base import ModelProvider, ModelResponse, ProviderError

# Question stems for mock quizzes; {place} is the location keyword
QUESTION_STEMS = [
    "In which century was {place} first recorded?",
    "What is {place} best known for?",
    "Which of these is closest to {place}?",
    "What type of place is {place}?",
    "Who is most associated with {place}?",
    "What is the usual way to reach {place}?",
]


def generate_mock_quiz(place: str, count: int = 5) -> str:
    """
    Generate quiz text in the five-line block format.

    Deterministic for a given place and count, so tests can assert on it.

    Args:
        place: The location keyword
        count: Number of questions

    Returns:
        Quiz text with ``count`` well-formed blocks
    """
    blocks = []
    for i in range(count):
        stem = QUESTION_STEMS[i % len(QUESTION_STEMS)].format(place=place)
        blocks.append(
            f"{i + 1}. {stem}\n"
            f"    a) Option A{i + 1}\n"
            f"    b) Option B{i + 1}\n"
            f"    c) Option C{i + 1}\n"
            f"    d) Option D{i + 1}\n"
            f"Answer: Option B{i + 1}"
        )
    return "\n\n".join(blocks)


@dataclass
class MockProvider(ModelProvider):
    """
    Mock provider for testing.

    Can be configured with custom response generators or fixed responses.
    """

    _name: str = "mock"
    _default_model: str = "mock-model-v1"
    fixed_response: Optional[str] = None
    response_generator: Optional[Callable[[str], str]] = None
    fail_rate: float = 0.0  # Probability of raising an error
    token_count: int = 100

    @property
    def name(self) -> str:
        return self._name

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
        """Generate a mock response."""
        if self.fail_rate > 0 and random.random() < self.fail_rate:
            raise ProviderError("Simulated mock provider failure")

        if self.fixed_response is not None:
            content = self.fixed_response
        elif self.response_generator is not None:
            content = self.response_generator(prompt)
        else:
            content = self._default_response(prompt)

        return ModelResponse(
            content=content,
            model=model or self._default_model,
            provider=self.name,
            usage={
                "input_tokens": len(prompt.split()) * 2,
                "output_tokens": self.token_count,
            },
        )

    def _default_response(self, prompt: str) -> str:
        """Answer quiz requests with a well-formed quiz, anything else with a stub."""
        match = re.search(r"Generate a (\d+)-question multiple-choice quiz about (.+?)\.?\s*$",
                          prompt, re.MULTILINE)
        if match:
            return generate_mock_quiz(match.group(2).strip(), count=int(match.group(1)))
        return "Mock response generated"
