"""Quiz module exports."""

from .models import Difficulty, MultipleChoiceQuestion, Quiz, TrueFalseQuestion

__all__ = [
    "Difficulty",
    "MultipleChoiceQuestion",
    "Quiz",
    "TrueFalseQuestion",
]
