from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class GenerateFlashcardsRequest(BaseModel):
    content: str = Field(..., description="Study material to turn into flashcards")
    card_count: int = Field(default=10, ge=1, le=100)
    llm: Optional[str] = None
