from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class SummarizeRequest(BaseModel):
    text: str
    max_length: int = Field(default=200, ge=10, le=2000, description="Word limit")
    llm: Optional[str] = None


class SummarizeResponse(BaseModel):
    summary: str
