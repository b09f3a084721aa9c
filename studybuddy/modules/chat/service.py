"""Chat replies: prompt composition, window trimming, backend call."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional

from studybuddy.core.logging import get_logger
from studybuddy.modules.chat.models import ChatReply, ConversationTurn
from studybuddy.modules.chat.prompts import build_system_prompt
from studybuddy.modules.chat.window import DEFAULT_MAX_TURNS, build_window

if TYPE_CHECKING:
    from studybuddy.modules.llm.registry import BackendRegistry

logger = get_logger(__name__)


class ChatService:
    def __init__(self, registry: "BackendRegistry", *, max_turns: int = DEFAULT_MAX_TURNS) -> None:
        self.registry = registry
        self.max_turns = max_turns

    async def reply(
        self,
        message: str,
        *,
        history: Iterable[ConversationTurn] = (),
        subject_id: Optional[str] = None,
        context: Optional[str] = None,
        provider: Optional[str] = None,
    ) -> ChatReply:
        backend = self.registry.get(provider)
        system_prompt = build_system_prompt(subject_id, context)
        window = build_window(system_prompt, history, message, self.max_turns)
        logger.debug(
            "Sending %d turns", len(window), extra={"provider": backend.name}
        )
        return await backend.generate_chat_response(window)
