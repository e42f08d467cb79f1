"""
Location quiz generator

Asks a text-generation provider for a quiz about a place and parses the
reply into structured questions.
"""

import logging
from typing import Optional

from ..config import config
from ..providers.base import ModelProvider
from .parser import QuizTextParser
from .prompts import QUIZ_SYSTEM_PROMPT, format_quiz_prompt
from .schema import GeneratedQuiz

logger = logging.getLogger(__name__)


class QuizGenerator:
    """
    Generates multiple-choice quizzes about a location keyword.

    Provider errors are not caught here; the caller decides how to report
    them.
    """

    def __init__(
        self,
        provider: ModelProvider,
        model: Optional[str] = None,
        parser: Optional[QuizTextParser] = None,
    ):
        """
        Initialize generator.

        Args:
            provider: AI model provider
            model: Optional model override
            parser: Optional parser override
        """
        self.provider = provider
        self.model = model
        self.parser = parser or QuizTextParser()

    async def generate(
        self,
        location_keyword: str,
        question_count: Optional[int] = None,
    ) -> GeneratedQuiz:
        """
        Generate a quiz about a location.

        Args:
            location_keyword: Place, landmark or area to ask about
            question_count: Number of questions to request

        Returns:
            GeneratedQuiz with parsed questions and the raw text
        """
        count = question_count or config.generation.question_count
        prompt = format_quiz_prompt(location_keyword, count=count)

        response = await self.provider.generate(
            prompt=prompt,
            system=QUIZ_SYSTEM_PROMPT,
            model=self.model,
            max_tokens=config.generation.max_tokens,
            temperature=config.generation.temperature,
        )

        questions = self.parser.parse(response.content)
        if not questions:
            logger.warning(
                f"No questions parsed from {response.provider} output for {location_keyword!r}"
            )
        else:
            logger.debug(f"Parsed {len(questions)}/{count} questions for {location_keyword!r}")

        return GeneratedQuiz(
            keyword=location_keyword,
            questions=questions,
            raw_text=response.content,
            provider=response.provider,
            model=response.model,
            usage=dict(response.usage),
        )
