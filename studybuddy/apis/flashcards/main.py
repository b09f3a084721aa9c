from __future__ import annotations

from fastapi import APIRouter, Depends

from studybuddy.core.config import settings
from studybuddy.apis.deps import backend_failure, get_registry, resolve_backend
from studybuddy.modules.flashcards.generator import generate_flashcards
from studybuddy.modules.flashcards.models import FlashcardSet
from studybuddy.modules.llm.errors import BackendError
from studybuddy.modules.llm.registry import BackendRegistry
from .schemas import GenerateFlashcardsRequest

router = APIRouter()


@router.post(
    f"/{settings.app.version}/flashcards/generate",
    response_model=FlashcardSet,
    tags=["flashcards"],
)
async def create_flashcards(
    req: GenerateFlashcardsRequest,
    registry: BackendRegistry = Depends(get_registry),
) -> FlashcardSet:
    backend = resolve_backend(registry, req.llm)
    try:
        return await generate_flashcards(backend, req.content, req.card_count)
    except BackendError as e:
        raise backend_failure(e, "generate flashcards")
