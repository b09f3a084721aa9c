"""Pydantic models for flashcard sets.

Length limits mirror what the decoder truncates to, so a set that reaches
callers always validates.
"""

from typing import Optional

from pydantic import BaseModel, Field

QUESTION_MAX_CHARS = 500
ANSWER_MAX_CHARS = 1000
CATEGORY_MAX_CHARS = 100
DEFAULT_CATEGORY = "General"


class Flashcard(BaseModel):
    """Simple question/answer flashcard."""

    question: str = Field(..., max_length=QUESTION_MAX_CHARS)
    answer: str = Field(..., max_length=ANSWER_MAX_CHARS)
    category: str = Field(default=DEFAULT_CATEGORY, max_length=CATEGORY_MAX_CHARS)


class FlashcardSet(BaseModel):
    """A set of flashcards with optional metadata."""

    title: Optional[str] = None
    description: Optional[str] = None
    cards: list[Flashcard] = Field(default_factory=list)
