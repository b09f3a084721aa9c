from __future__ import annotations

from fastapi import APIRouter, Depends

from studybuddy.core.config import settings
from studybuddy.apis.deps import backend_failure, get_registry, resolve_backend
from studybuddy.modules.llm.errors import BackendError
from studybuddy.modules.llm.registry import BackendRegistry
from studybuddy.modules.notes.summarize import summarize_text
from .schemas import SummarizeRequest, SummarizeResponse

router = APIRouter()


@router.post(
    f"/{settings.app.version}/notes/summarize",
    response_model=SummarizeResponse,
    tags=["notes"],
)
async def summarize(
    req: SummarizeRequest,
    registry: BackendRegistry = Depends(get_registry),
) -> SummarizeResponse:
    backend = resolve_backend(registry, req.llm)
    try:
        summary = await summarize_text(backend, req.text, req.max_length)
    except BackendError as e:
        raise backend_failure(e, "summarize text")
    return SummarizeResponse(summary=summary)
