"""
Quiz text parser

Extracts multiple-choice questions from loosely formatted model output.
A question block is five kinds of line, in this order:

    1. What color is the sky?
    a) Red
    b) Blue
    c) Green
    d) Yellow
    Answer: Blue

Surrounding whitespace, blank lines between the lines of a block, and
whitespace after each marker are ignored. Anything that does not complete a
block is dropped; a partially filled question is never returned.
"""

import logging
import re
from typing import Optional

from .schema import OPTION_LABELS, QuizQuestion

logger = logging.getLogger(__name__)

# (field name, pattern on the stripped line); group 1 is the field value
# when present, otherwise the whole line is.
LINE_SHAPES: list[tuple[str, re.Pattern]] = [
    ("question", re.compile(r"[0-9]+\.\s*\S.*")),
    *[(label, re.compile(rf"{label}\)\s*(.+)")) for label in OPTION_LABELS],
    ("answer", re.compile(r"Answer:\s*(.+)")),
]


class QuizTextParser:
    """
    Line-by-line scanner for question blocks.

    Holds no state between calls; every parse() returns a new list.
    """

    def parse(self, text: str) -> list[QuizQuestion]:
        """
        Parse all complete question blocks in ``text``.

        Args:
            text: Raw generated text

        Returns:
            Questions in the order they appear (possibly empty)
        """
        questions: list[QuizQuestion] = []
        if not text:
            return questions

        fields: dict[str, str] = {}
        step = 0

        for raw_line in text.split("\n"):
            line = raw_line.strip()
            if not line:
                continue

            value = self.match_line(step, line)
            if value is None and step > 0:
                # Broken block: drop it, but this line may open the next one
                logger.debug(f"Abandoned question block at {LINE_SHAPES[step][0]!r} line: {line[:60]!r}")
                fields = {}
                step = 0
                value = self.match_line(step, line)

            if value is None:
                continue

            fields[LINE_SHAPES[step][0]] = value
            step += 1

            if step == len(LINE_SHAPES):
                questions.append(self._build(fields))
                fields = {}
                step = 0

        return questions

    @staticmethod
    def match_line(step: int, line: str) -> Optional[str]:
        """Return the trimmed field value if ``line`` fits shape ``step``."""
        _, pattern = LINE_SHAPES[step]
        match = pattern.fullmatch(line)
        if match is None:
            return None
        value = match.group(1) if pattern.groups else match.group(0)
        return value.strip() or None

    @staticmethod
    def _build(fields: dict[str, str]) -> QuizQuestion:
        return QuizQuestion(
            question=fields["question"],
            options={label: fields[label] for label in OPTION_LABELS},
            answer=fields["answer"],
        )


def parse_quiz(text: str) -> list[QuizQuestion]:
    """Parse question blocks from generated text."""
    return QuizTextParser().parse(text)
