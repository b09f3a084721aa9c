"""Flashcards module exports."""

from .models.flashcards import Flashcard, FlashcardSet

__all__ = [
    "Flashcard",
    "FlashcardSet",
]
