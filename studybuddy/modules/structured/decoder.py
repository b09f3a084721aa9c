"""Decode quiz and flashcard payloads from raw model text.

Provides:
- decode(raw_text, kind, target_count) -> Quiz | FlashcardSet
- decode_quiz(raw_text) -> Quiz
- decode_flashcards(raw_text, target_count) -> FlashcardSet

Flashcards always decode to exactly ``target_count`` cards, falling back to
scraped or placeholder content. Quizzes raise ``DecodeError`` instead of
inventing questions.
"""

from __future__ import annotations

from enum import Enum
from functools import partial
from typing import Any, Callable, Optional, Union

from pydantic import TypeAdapter, ValidationError

from studybuddy.core.logging import get_logger
from studybuddy.modules.flashcards.models import (
    ANSWER_MAX_CHARS,
    CATEGORY_MAX_CHARS,
    DEFAULT_CATEGORY,
    QUESTION_MAX_CHARS,
    Flashcard,
    FlashcardSet,
)
from studybuddy.modules.quiz.models import Quiz, QuizQuestion
from studybuddy.modules.structured.errors import DecodeError
from studybuddy.modules.structured.stages import (
    parse_braced,
    parse_direct,
    scrape_cards,
    strip_fences,
)

logger = get_logger(__name__)

FILLER_ANSWER = (
    "Keep reviewing your study materials to strengthen your understanding of this topic."
)
FILLER_CATEGORY = "Additional"
DEFAULT_QUIZ_TITLE = "Quiz"

_question_adapter: TypeAdapter = TypeAdapter(QuizQuestion)


class PayloadKind(str, Enum):
    QUIZ = "quiz"
    FLASHCARDS = "flashcards"


COLLECTION_KEYS = {
    PayloadKind.QUIZ: "questions",
    PayloadKind.FLASHCARDS: "cards",
}

Stage = Callable[[str], Optional[dict]]


def _stages(kind: PayloadKind) -> list[tuple[str, Stage]]:
    return [
        ("direct", partial(parse_direct, collection_key=COLLECTION_KEYS[kind])),
        ("braced", partial(parse_braced, collection_key=COLLECTION_KEYS[kind])),
    ]


def _run_stages(text: str, kind: PayloadKind) -> Optional[dict]:
    for name, stage in _stages(kind):
        data = stage(text)
        if data is not None:
            logger.debug("Decoded %s payload via %s stage", kind.value, name)
            return data
    return None


def _clip(value: Any, limit: int) -> str:
    return str(value).replace('"', '\\"')[:limit]


def _filler_card(index: int) -> Flashcard:
    return Flashcard(
        question=f"Additional question {index + 1} about the topic?",
        answer=FILLER_ANSWER,
        category=FILLER_CATEGORY,
    )


def _optional_text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def normalize_cards(data: dict, target_count: int) -> FlashcardSet:
    """Clean each card and pad or truncate the set to ``target_count``."""
    raw_cards = data.get("cards") or data.get("flashcards") or []
    if not isinstance(raw_cards, list):
        raw_cards = []

    cards: list[Flashcard] = []
    for item in raw_cards:
        if not isinstance(item, dict):
            continue
        question = item.get("question", item.get("front"))
        answer = item.get("answer", item.get("back"))
        if question is None or answer is None:
            logger.warning("Skipping flashcard without question/answer: %r", item)
            continue
        category = item.get("category") or DEFAULT_CATEGORY
        cards.append(
            Flashcard(
                question=_clip(question, QUESTION_MAX_CHARS),
                answer=_clip(answer, ANSWER_MAX_CHARS),
                category=_clip(category, CATEGORY_MAX_CHARS),
            )
        )

    if len(cards) < target_count:
        logger.info("Padding flashcards from %d to %d", len(cards), target_count)
        while len(cards) < target_count:
            cards.append(_filler_card(len(cards)))
    cards = cards[:target_count]

    return FlashcardSet(
        title=_optional_text(data.get("title")),
        description=_optional_text(data.get("description")),
        cards=cards,
    )


def _prepare_question(item: dict) -> dict:
    q = dict(item)
    if "type" not in q:
        q["type"] = "multiple-choice" if q.get("options") else "true-false"
    if isinstance(q.get("correctAnswer"), bool):
        q["correctAnswer"] = "true" if q["correctAnswer"] else "false"
    if q["type"] == "true-false":
        q.pop("options", None)
    return q


def coerce_quiz(data: dict, raw_text: str = "") -> Quiz:
    """Validate a decoded quiz, dropping questions that fit neither variant.

    Raises ``DecodeError`` when no question survives validation.
    """
    raw_questions = data.get("questions")
    if not isinstance(raw_questions, list):
        logger.warning("Quiz payload has no questions list")
        raise DecodeError("invalid-json", raw_text=raw_text)

    questions = []
    for item in raw_questions:
        if not isinstance(item, dict):
            continue
        try:
            questions.append(_question_adapter.validate_python(_prepare_question(item)))
        except ValidationError as e:
            logger.warning("Dropping malformed quiz question: %s", e.errors()[:1])

    if not questions:
        logger.warning("No valid questions in quiz payload")
        raise DecodeError("invalid-json", raw_text=raw_text)

    title = data.get("title")
    if not isinstance(title, str) or not title:
        title = DEFAULT_QUIZ_TITLE

    return Quiz(
        title=title,
        description=_optional_text(data.get("description")),
        questions=questions,
    )


def decode(
    raw_text: str,
    kind: Union[PayloadKind, str],
    target_count: Optional[int] = None,
) -> Union[Quiz, FlashcardSet]:
    """Turn raw model output into a quiz or a flashcard set."""
    kind = PayloadKind(kind)
    if kind == PayloadKind.FLASHCARDS and (target_count is None or target_count < 1):
        raise ValueError("target_count must be a positive integer for flashcards")

    data = _run_stages(strip_fences(raw_text), kind)

    if kind == PayloadKind.QUIZ:
        if data is None:
            logger.warning("No JSON object recoverable from quiz output")
            raise DecodeError("invalid-json", raw_text=raw_text)
        return coerce_quiz(data, raw_text)

    if data is None:
        logger.warning("Flashcard output is not JSON; scraping question/answer pairs")
        data = scrape_cards(raw_text)
    return normalize_cards(data, int(target_count))


def decode_quiz(raw_text: str) -> Quiz:
    return decode(raw_text, PayloadKind.QUIZ)  # type: ignore[return-value]


def decode_flashcards(raw_text: str, target_count: int) -> FlashcardSet:
    return decode(raw_text, PayloadKind.FLASHCARDS, target_count)  # type: ignore[return-value]
