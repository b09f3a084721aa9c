"""Pydantic models for generated quizzes.

Questions are a tagged union on ``type`` so callers never have to guess
whether ``options`` is present.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class MultipleChoiceQuestion(BaseModel):
    """A question with exactly four options."""

    question: str
    type: Literal["multiple-choice"] = "multiple-choice"
    options: list[str] = Field(..., min_length=4, max_length=4)
    correctAnswer: str
    explanation: Optional[str] = None


class TrueFalseQuestion(BaseModel):
    question: str
    type: Literal["true-false"] = "true-false"
    correctAnswer: str
    explanation: Optional[str] = None


QuizQuestion = Annotated[
    Union[MultipleChoiceQuestion, TrueFalseQuestion],
    Field(discriminator="type"),
]


class Quiz(BaseModel):
    title: str
    description: Optional[str] = None
    questions: list[QuizQuestion] = Field(default_factory=list)
