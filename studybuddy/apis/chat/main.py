from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status

from studybuddy.core.config import settings
from studybuddy.core.logging import get_logger
from studybuddy.apis.deps import (
    backend_failure,
    get_chat_service,
    get_chat_store,
    get_registry,
    resolve_backend,
    unsupported_llm,
)
from studybuddy.modules.chat.service import ChatService
from studybuddy.modules.chat.store import ChatStore
from studybuddy.modules.llm.errors import BackendError
from studybuddy.modules.llm.registry import BackendRegistry
from .schemas import (
    ChatListResponse,
    ChatResponse,
    CreateChatRequest,
    MessagesResponse,
    PostMessageRequest,
    PostMessageResponse,
    SendMessageRequest,
    SendMessageResponse,
)

logger = get_logger(__name__)

router = APIRouter()


def _chat_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Chat not found")


@router.post(
    f"/{settings.app.version}/chat",
    response_model=SendMessageResponse,
    tags=["chat"],
)
async def send_message(
    req: SendMessageRequest,
    registry: BackendRegistry = Depends(get_registry),
    chat_service: ChatService = Depends(get_chat_service),
) -> SendMessageResponse:
    if not req.message.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Message is required"
        )
    backend = resolve_backend(registry, req.llm)
    try:
        reply = await chat_service.reply(
            req.message,
            subject_id=req.subject_id,
            context=req.context,
            provider=backend.name,
        )
    except BackendError as e:
        raise backend_failure(e, "generate AI response")
    return SendMessageResponse(
        user_message=req.message,
        ai_response=reply.content,
        timestamp=datetime.now(timezone.utc).isoformat(),
        subject_id=req.subject_id,
        tokens_used=reply.tokens_used,
    )


@router.post(
    f"/{settings.app.version}/chats",
    response_model=ChatResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["chat"],
)
async def create_chat(
    req: CreateChatRequest,
    registry: BackendRegistry = Depends(get_registry),
    store: ChatStore = Depends(get_chat_store),
) -> ChatResponse:
    if not registry.supports(req.llm):
        raise unsupported_llm(registry)
    chat = store.create_chat(
        user_id=req.user_id, subject=req.subject, llm=req.llm, title=req.title
    )
    return ChatResponse(chat=chat)


@router.get(
    f"/{settings.app.version}/chats",
    response_model=ChatListResponse,
    tags=["chat"],
)
async def list_chats(
    user_id: str, store: ChatStore = Depends(get_chat_store)
) -> ChatListResponse:
    return ChatListResponse(chats=store.list_chats(user_id))


@router.get(
    f"/{settings.app.version}/chats/{{chat_id}}/messages",
    response_model=MessagesResponse,
    tags=["chat"],
)
async def list_messages(
    chat_id: str, store: ChatStore = Depends(get_chat_store)
) -> MessagesResponse:
    try:
        return MessagesResponse(messages=store.messages(chat_id))
    except ValueError:
        raise _chat_not_found()


@router.post(
    f"/{settings.app.version}/chats/{{chat_id}}/messages",
    response_model=PostMessageResponse,
    tags=["chat"],
)
async def post_message(
    chat_id: str,
    req: PostMessageRequest,
    store: ChatStore = Depends(get_chat_store),
    chat_service: ChatService = Depends(get_chat_service),
) -> PostMessageResponse:
    try:
        chat = store.get_chat(chat_id)
        prior = store.history(chat_id)
    except ValueError:
        raise _chat_not_found()
    if req.sender != "user":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only user messages can be posted",
        )

    store.add_message(chat_id, sender="user", content=req.content)
    try:
        reply = await chat_service.reply(
            req.content, history=prior, subject_id=chat.subject, provider=chat.llm
        )
    except BackendError as e:
        logger.error("Chat %s reply failed: %s", chat_id, e, extra={"provider": chat.llm})
        raise backend_failure(e, "generate AI response")

    store.add_message(chat_id, sender="assistant", content=reply.content)
    return PostMessageResponse(ai_response=reply.content, tokens_used=reply.tokens_used)
