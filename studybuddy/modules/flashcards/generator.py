"""Flashcard generation on top of a model backend.

Always yields exactly ``card_count`` cards: malformed or missing model output
degrades to scraped or placeholder cards rather than an error.
"""

from __future__ import annotations

from studybuddy.core.logging import get_logger
from studybuddy.modules.flashcards.models import FlashcardSet
from studybuddy.modules.llm.backends import ModelBackend
from studybuddy.modules.structured import decode_flashcards

logger = get_logger(__name__)


def _build_prompt(content: str, card_count: int) -> str:
    return (
        f"Based on the following content, generate {int(card_count)} flashcards. "
        "Each card has a clear, atomic question, a concise answer (plain text, no "
        "markdown) and a short category. Return only a JSON object; do not include "
        "code fences.\n\n"
        f"Content: {content}\n\n"
        "Format:\n"
        "{\n"
        '  "title": "Set title",\n'
        '  "description": "One sentence describing the set",\n'
        '  "cards": [\n'
        '    {"question": "Question 1", "answer": "Answer 1", "category": "Topic"}\n'
        "  ]\n"
        "}"
    )


async def generate_flashcards(
    backend: ModelBackend, content: str, card_count: int = 10
) -> FlashcardSet:
    card_count = max(1, int(card_count))
    if not backend.is_configured:
        logger.info(
            "No API key configured - returning placeholder flashcards",
            extra={"provider": backend.name},
        )
        return decode_flashcards("", card_count)
    raw = await backend.complete(
        _build_prompt(content, card_count),
        temperature=0.3,
        max_tokens=1500,
    )
    return decode_flashcards(raw, card_count)
