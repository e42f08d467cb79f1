"""
Prompt templates for quiz generation

The user prompt pins the model to the exact five-line block format that
the parser understands.
"""

QUIZ_SYSTEM_PROMPT = "You are a quiz generator. Create a precise multiple-choice quiz."

QUIZ_GENERATE_PROMPT = """Generate a {count}-question multiple-choice quiz about {location_keyword}.
Format EXACTLY like this:
1. What is [question]?
    a) [Option A]
    b) [Option B]
    c) [Option C]
    d) [Option D]
Answer: [Correct Answer]"""


def format_quiz_prompt(location_keyword: str, count: int = 5) -> str:
    """Format the generation prompt for a place or landmark keyword."""
    return QUIZ_GENERATE_PROMPT.format(
        count=count,
        location_keyword=location_keyword.strip(),
    )
