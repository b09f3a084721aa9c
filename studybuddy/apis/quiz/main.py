from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from studybuddy.core.config import settings
from studybuddy.core.logging import get_logger
from studybuddy.apis.deps import backend_failure, get_registry, resolve_backend
from studybuddy.modules.llm.errors import BackendError
from studybuddy.modules.llm.registry import BackendRegistry
from studybuddy.modules.quiz.generator import generate_quiz
from studybuddy.modules.quiz.models import Quiz
from studybuddy.modules.structured import DecodeError
from .schemas import GenerateQuizRequest

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    f"/{settings.app.version}/quizzes/generate",
    response_model=Quiz,
    tags=["quiz"],
)
async def create_quiz(
    req: GenerateQuizRequest,
    registry: BackendRegistry = Depends(get_registry),
) -> Quiz:
    backend = resolve_backend(registry, req.llm)
    try:
        return await generate_quiz(
            backend, req.content, req.question_count, req.difficulty
        )
    except DecodeError as e:
        logger.warning(
            "Quiz output could not be decoded (%s)", e.reason, extra={"provider": backend.name}
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to generate quiz"
        )
    except BackendError as e:
        raise backend_failure(e, "generate quiz")
