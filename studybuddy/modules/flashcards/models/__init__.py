from .flashcards import (
    ANSWER_MAX_CHARS,
    CATEGORY_MAX_CHARS,
    DEFAULT_CATEGORY,
    QUESTION_MAX_CHARS,
    Flashcard,
    FlashcardSet,
)

__all__ = [
    "ANSWER_MAX_CHARS",
    "CATEGORY_MAX_CHARS",
    "DEFAULT_CATEGORY",
    "QUESTION_MAX_CHARS",
    "Flashcard",
    "FlashcardSet",
]
