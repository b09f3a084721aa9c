"""Quiz generation on top of a model backend.

Provides:
- async generate_quiz(backend, content, question_count, difficulty) -> Quiz
- placeholder_quiz(topic) -> Quiz

The backend only returns text; the decoder turns it into a validated ``Quiz``
or raises ``DecodeError``.
"""

from __future__ import annotations

from studybuddy.core.logging import get_logger
from studybuddy.modules.llm.backends import ModelBackend
from studybuddy.modules.quiz.models import (
    Difficulty,
    MultipleChoiceQuestion,
    Quiz,
    TrueFalseQuestion,
)
from studybuddy.modules.structured import decode_quiz

logger = get_logger(__name__)


def _build_prompt(content: str, question_count: int, difficulty: Difficulty) -> str:
    return (
        f"Based on the following content, generate a {difficulty.value} difficulty quiz "
        f"with {int(question_count)} questions. Use multiple-choice questions with "
        "exactly 4 options and true-false questions. Return only a JSON object; "
        "do not include code fences.\n\n"
        f"Content: {content}\n\n"
        "Format:\n"
        "{\n"
        '  "title": "Quiz Title",\n'
        '  "description": "One sentence describing the quiz",\n'
        '  "questions": [\n'
        "    {\n"
        '      "question": "Question text",\n'
        '      "type": "multiple-choice",\n'
        '      "options": ["A", "B", "C", "D"],\n'
        '      "correctAnswer": "A",\n'
        '      "explanation": "Why this is correct"\n'
        "    },\n"
        "    {\n"
        '      "question": "Statement to judge",\n'
        '      "type": "true-false",\n'
        '      "correctAnswer": "true",\n'
        '      "explanation": "Why this is correct"\n'
        "    }\n"
        "  ]\n"
        "}"
    )


def placeholder_quiz(topic: str) -> Quiz:
    """Quiz returned when no model API key is configured."""
    return Quiz(
        title=f"{topic} Quiz (demo)",
        description="AI generation is disabled because no API key is configured.",
        questions=[
            MultipleChoiceQuestion(
                question="Which of these is a good way to study?",
                options=[
                    "Spaced repetition",
                    "Cramming the night before",
                    "Skipping practice",
                    "Reading once",
                ],
                correctAnswer="Spaced repetition",
                explanation="Reviewing material over time improves retention.",
            ),
            TrueFalseQuestion(
                question="Testing yourself helps you remember material.",
                correctAnswer="true",
                explanation="Retrieval practice strengthens memory.",
            ),
        ],
    )


async def generate_quiz(
    backend: ModelBackend,
    content: str,
    question_count: int = 5,
    difficulty: Difficulty | str = Difficulty.MEDIUM,
) -> Quiz:
    difficulty = Difficulty(difficulty)
    if not backend.is_configured:
        logger.info(
            "No API key configured - returning placeholder quiz",
            extra={"provider": backend.name},
        )
        return placeholder_quiz(content[:60] or "Study")
    raw = await backend.complete(
        _build_prompt(content, question_count, difficulty),
        temperature=0.3,
        max_tokens=2000,
    )
    return decode_quiz(raw)
