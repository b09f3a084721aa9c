from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from studybuddy.core.config import settings
from studybuddy.modules.flashcards.generator import generate_flashcards
from studybuddy.modules.llm.errors import BackendError
from studybuddy.modules.llm.registry import BackendRegistry
from studybuddy.modules.quiz.generator import generate_quiz
from studybuddy.modules.structured import DecodeError, PayloadKind, decode


def _load_prompt(args: argparse.Namespace) -> str:
    if args.prompt and args.prompt_file:
        raise SystemExit("Provide either --prompt or --prompt-file, not both")
    if args.prompt_file:
        return Path(args.prompt_file).read_text(encoding="utf-8")
    if args.prompt:
        return args.prompt
    raise SystemExit("--prompt or --prompt-file is required")


def _add_prompt_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--prompt", "-p", help="Topic or study material (text)")
    p.add_argument("--prompt-file", help="Path to a file containing the prompt")
    p.add_argument("--llm", help="Provider: openai, llama or google")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="studybuddy", description="Study buddy generation CLI"
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    d = sub.add_parser("decode", help="Decode raw model output into JSON")
    d.add_argument("--kind", choices=[k.value for k in PayloadKind], required=True)
    d.add_argument("--count", type=int, default=10, help="Flashcard count")
    d.add_argument("--file", help="Raw text file; stdin when omitted")

    q = sub.add_parser("quiz", help="Generate a quiz")
    _add_prompt_args(q)
    q.add_argument("--count", type=int, default=5)
    q.add_argument("--difficulty", default="medium", choices=["easy", "medium", "hard"])

    f = sub.add_parser("flashcards", help="Generate a flashcard set")
    _add_prompt_args(f)
    f.add_argument("--count", type=int, default=10)

    args = parser.parse_args(argv)
    if args.cmd == "decode":
        raw = (
            Path(args.file).read_text(encoding="utf-8") if args.file else sys.stdin.read()
        )
        try:
            result = decode(raw, args.kind, args.count)
        except DecodeError as e:
            print(f"Could not decode {args.kind}: {e.reason}", file=sys.stderr)
            return 1
        print(json.dumps(result.model_dump(), indent=2, ensure_ascii=False))
        return 0

    registry = BackendRegistry.from_settings(settings.llm)
    try:
        backend = registry.get(args.llm)
    except ValueError:
        print(f"Only {', '.join(registry.names())} are supported.", file=sys.stderr)
        return 1
    prompt = _load_prompt(args)
    try:
        if args.cmd == "quiz":
            result = asyncio.run(
                generate_quiz(backend, prompt, args.count, args.difficulty)
            )
        else:
            result = asyncio.run(generate_flashcards(backend, prompt, args.count))
    except DecodeError:
        print("Failed to generate quiz", file=sys.stderr)
        return 1
    except BackendError as e:
        print(f"Failed to generate {args.cmd}: {e}", file=sys.stderr)
        return 1
    print(json.dumps(result.model_dump(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
