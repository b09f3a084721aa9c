from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from studybuddy.modules.quiz.models import Difficulty


class GenerateQuizRequest(BaseModel):
    content: str = Field(..., description="Topic or study material to quiz on")
    question_count: int = Field(default=5, ge=1, le=50)
    difficulty: Difficulty = Difficulty.MEDIUM
    llm: Optional[str] = None
