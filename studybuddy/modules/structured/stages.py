"""Parsing stages for JSON that a language model was asked to produce.

Each stage takes text and returns the decoded ``dict`` or ``None``; the
decoder runs them cheapest first and stops at the first hit.
"""

from __future__ import annotations

import json
import re
from typing import Any, Optional

_FENCE_OPEN = re.compile(r"^```[\w+-]*[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?[ \t]*```$")
_TRAILING_COMMA = re.compile(r",\s*(?=[}\]])")
_FULLWIDTH_COMMA = "，"

_STRING_VALUE = r'"((?:[^"\\]|\\.)*)"'
_QUESTION_FIELD = re.compile(r'"(?:question|front)"\s*:\s*' + _STRING_VALUE, re.DOTALL)
_ANSWER_FIELD = re.compile(r'"(?:answer|back)"\s*:\s*' + _STRING_VALUE, re.DOTALL)

FALLBACK_TITLE = "Study Session Flashcards"
FALLBACK_DESCRIPTION = "Flashcards generated from your study session."
FALLBACK_CARD = {
    "question": "What are the key ideas from this study session?",
    "answer": "Review your study session notes and summarize the main concepts in your own words.",
    "category": "General",
}


def strip_fences(text: str) -> str:
    """Remove a surrounding markdown code fence, with or without a language tag."""
    s = (text or "").strip()
    s = _FENCE_OPEN.sub("", s, count=1)
    s = _FENCE_CLOSE.sub("", s, count=1)
    return s.strip()


def repair_json(text: str) -> str:
    """Fix the small syntax slips models make: trailing and full-width commas."""
    s = text.replace(_FULLWIDTH_COMMA, ",")
    return _TRAILING_COMMA.sub("", s)


def _as_object(data: Any, collection_key: str) -> Optional[dict]:
    if isinstance(data, dict):
        return data
    if isinstance(data, list):
        # Bare arrays are what older prompts asked for
        return {collection_key: data}
    return None


def parse_direct(text: str, collection_key: str) -> Optional[dict]:
    try:
        data = json.loads(text)
    except ValueError:
        return None
    return _as_object(data, collection_key)


def parse_braced(text: str, collection_key: str) -> Optional[dict]:
    """Parse the outermost ``{...}`` span after light repairs.

    Text that opens with ``[`` is treated as a bare array instead.
    """
    open_ch, close_ch = ("[", "]") if text.lstrip().startswith("[") else ("{", "}")
    start = text.find(open_ch)
    end = text.rfind(close_ch)
    if start == -1 or end <= start:
        return None
    candidate = repair_json(text[start : end + 1])
    try:
        data = json.loads(candidate)
    except ValueError:
        return None
    return _as_object(data, collection_key)


def _unescape(value: str) -> str:
    try:
        return json.loads(f'"{value}"')
    except ValueError:
        return value


def scrape_cards(text: str) -> dict:
    """Pair up ``"question"``/``"answer"`` fields found anywhere in ``text``.

    Always returns a flashcard payload: when nothing can be paired, a single
    generic review card stands in.
    """
    questions = [_unescape(m.group(1)) for m in _QUESTION_FIELD.finditer(text or "")]
    answers = [_unescape(m.group(1)) for m in _ANSWER_FIELD.finditer(text or "")]
    cards = [
        {"question": q, "answer": a, "category": "General"}
        for q, a in zip(questions, answers)
    ]
    if not cards:
        cards = [dict(FALLBACK_CARD)]
    return {
        "title": FALLBACK_TITLE,
        "description": FALLBACK_DESCRIPTION,
        "cards": cards,
    }
