"""
Command-line interface for proximity-quiz

Runs the HTTP service, parses quiz text, or generates a quiz from the
terminal.
"""

import asyncio
import sys
import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from .config import config
from .providers import ProviderError, get_provider
from .quiz.generator import QuizGenerator
from .quiz.parser import parse_quiz
from .quiz.schema import QuizQuestion


def format_question(question: QuizQuestion) -> str:
    """Format a single question for terminal output."""
    lines = [f"\033[1m{question.question}\033[0m"]
    for label, text in question.options.items():
        marker = "\033[92m*\033[0m" if text == question.answer else " "
        lines.append(f"  {marker} {label}) {text}")
    lines.append(f"    Answer: {question.answer}")
    return "\n".join(lines)


def print_questions(questions: List[QuizQuestion]) -> None:
    """Print a formatted list of questions."""
    print("\n" + "=" * 60)
    print(f"QUIZ ({len(questions)} question{'s' if len(questions) != 1 else ''})")
    print("=" * 60)
    if not questions:
        print("\nNo well-formed questions found.")
    for question in questions:
        print()
        print(format_question(question))
    print()


def read_text(source: Optional[str]) -> str:
    """Read text from a file path, or stdin when no path (or '-') is given."""
    if not source or source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="proximity-quiz",
        description="Location dwell-time tracking and quiz generation service",
        epilog="Example: proximity-quiz generate \"Eiffel Tower\" --mock"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service")
    serve_parser.add_argument(
        "--host",
        default=config.server.host,
        help=f"Bind address (default: {config.server.host})"
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=config.server.port,
        help=f"Port (default: {config.server.port})"
    )

    # Parse command
    parse_parser = subparsers.add_parser("parse", help="Parse quiz text into JSON")
    parse_parser.add_argument(
        "file",
        nargs="?",
        help="File with generated quiz text (default: stdin)"
    )

    # Generate command
    generate_parser = subparsers.add_parser("generate", help="Generate a quiz about a location")
    generate_parser.add_argument(
        "keyword",
        help="Place, landmark or area to build the quiz around"
    )
    generate_parser.add_argument(
        "--provider",
        choices=["perplexity", "claude", "mock"],
        default=config.generation.provider,
        help=f"Text-generation provider (default: {config.generation.provider})"
    )
    generate_parser.add_argument(
        "--mock",
        action="store_true",
        help="Use mock provider (for testing without API key)"
    )
    generate_parser.add_argument(
        "--json",
        action="store_true",
        help="Output results as JSON"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "serve":
        import uvicorn
        from .app import create_app

        uvicorn.run(create_app(), host=args.host, port=args.port)
        return 0

    if args.command == "parse":
        try:
            text = read_text(args.file)
        except OSError as e:
            print(f"Could not read {args.file}: {e}", file=sys.stderr)
            return 1
        questions = parse_quiz(text)
        print(json.dumps([q.to_dict() for q in questions], indent=2))
        return 0

    if args.command == "generate":
        provider_name = "mock" if args.mock else args.provider
        provider = get_provider(provider_name)
        model = config.generation.model or None

        async def run_generate():
            generator = QuizGenerator(provider, model=model)
            try:
                return await generator.generate(args.keyword)
            finally:
                await provider.close()

        try:
            quiz = asyncio.run(run_generate())
        except ProviderError as e:
            print(f"Quiz generation failed: {e}", file=sys.stderr)
            return 1

        if args.json:
            print(quiz.to_json())
        else:
            print(f"\nQuiz about \"{quiz.keyword}\" ({quiz.provider}, {quiz.model})")
            print_questions(quiz.questions)
        return 0

    return 1


if __name__ == "__main__":
    sys.exit(main())
