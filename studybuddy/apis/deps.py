from __future__ import annotations

from fastapi import HTTPException, Request, status

from studybuddy.modules.chat.service import ChatService
from studybuddy.modules.chat.store import ChatStore
from studybuddy.modules.llm.errors import BackendError, BackendTimeout
from studybuddy.modules.llm.registry import BackendRegistry


def get_registry(request: Request) -> BackendRegistry:
    return request.app.state.registry


def get_chat_store(request: Request) -> ChatStore:
    return request.app.state.chat_store


def get_chat_service(request: Request) -> ChatService:
    return request.app.state.chat_service


def unsupported_llm(registry: BackendRegistry) -> HTTPException:
    supported = ", ".join(registry.names())
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=f"Only {supported} are supported.",
    )


def resolve_backend(registry: BackendRegistry, llm: str | None):
    """Return the named backend, or the default when ``llm`` is empty."""
    try:
        return registry.get(llm)
    except ValueError:
        raise unsupported_llm(registry)


def backend_failure(e: BackendError, action: str) -> HTTPException:
    """Translate a backend failure into the HTTP error the client sees."""
    if isinstance(e, BackendTimeout):
        return HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail=f"Timed out trying to {action}",
        )
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Failed to {action}"
    )
