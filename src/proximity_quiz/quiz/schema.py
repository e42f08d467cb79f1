"""
Quiz schema and data structures

Defines the structured form of a generated multiple-choice quiz.
"""

from dataclasses import dataclass, field
from typing import Any, Optional
import json

OPTION_LABELS = ("a", "b", "c", "d")


@dataclass
class QuizQuestion:
    """A single multiple-choice question with four lettered options."""
    question: str
    options: dict[str, str]
    answer: str

    def to_dict(self) -> dict:
        return {
            "question": self.question,
            "options": {label: self.options[label] for label in OPTION_LABELS},
            "answer": self.answer,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "QuizQuestion":
        options = data["options"]
        return cls(
            question=data["question"],
            options={label: options[label] for label in OPTION_LABELS},
            answer=data["answer"],
        )


@dataclass
class GeneratedQuiz:
    """
    A quiz produced for a location keyword.

    Keeps the raw generation output alongside the parsed questions so callers
    can see what the model said even when nothing parsed.
    """
    keyword: str
    questions: list[QuizQuestion]
    raw_text: str
    provider: Optional[str] = None
    model: Optional[str] = None
    usage: dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.questions

    def to_dict(self) -> dict:
        """Response body shape: questions plus the raw text."""
        return {
            "questions": [q.to_dict() for q in self.questions],
            "rawText": self.raw_text,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)
