"""In-memory chat log.

Chats are kept in-process only. A chat's conversational memory spans every
chat the same user opened for the same subject with the same provider.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from studybuddy.modules.chat.models import Chat, ChatMessage, ConversationTurn, Role


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _iso(dt: datetime) -> str:
    return dt.isoformat().replace("+00:00", "Z")


@dataclass
class _Chat:
    id: str
    user_id: str
    subject: str
    llm: str
    title: Optional[str] = None
    created_at: datetime = field(default_factory=_now_utc)
    messages: list[ChatMessage] = field(default_factory=list)

    def to_model(self) -> Chat:
        return Chat(
            id=self.id,
            user_id=self.user_id,
            subject=self.subject,
            llm=self.llm,
            title=self.title,
            created_at=_iso(self.created_at),
        )


class ChatStore:
    def __init__(self) -> None:
        self._chats: dict[str, _Chat] = {}
        self._seq = itertools.count(1)

    def create_chat(
        self, *, user_id: str, subject: str, llm: str, title: Optional[str] = None
    ) -> Chat:
        chat = _Chat(id=uuid4().hex, user_id=user_id, subject=subject, llm=llm, title=title)
        self._chats[chat.id] = chat
        return chat.to_model()

    def get_chat(self, chat_id: str) -> Chat:
        chat = self._chats.get(chat_id)
        if not chat:
            raise ValueError("chat_not_found")
        return chat.to_model()

    def list_chats(self, user_id: str) -> list[Chat]:
        # Insertion order is creation order; newest first
        return [c.to_model() for c in reversed(self._chats.values()) if c.user_id == user_id]

    def add_message(self, chat_id: str, *, sender: str, content: str) -> ChatMessage:
        chat = self._chats.get(chat_id)
        if not chat:
            raise ValueError("chat_not_found")
        msg = ChatMessage(
            chat_id=chat.id,
            id=str(next(self._seq)),
            sender=Role.USER if sender == Role.USER.value else Role.ASSISTANT,
            content=content,
            model=chat.llm,
            created_at=_iso(_now_utc()),
        )
        chat.messages.append(msg)
        return msg

    def messages(self, chat_id: str) -> list[ChatMessage]:
        """Messages across all sibling chats (same user, subject and provider)."""
        chat = self._chats.get(chat_id)
        if not chat:
            raise ValueError("chat_not_found")
        out = [
            m
            for c in self._chats.values()
            if (c.user_id, c.subject, c.llm) == (chat.user_id, chat.subject, chat.llm)
            for m in c.messages
        ]
        out.sort(key=lambda m: int(m.id))
        return out

    def history(self, chat_id: str) -> list[ConversationTurn]:
        return [
            ConversationTurn(role=m.sender, content=m.content)
            for m in self.messages(chat_id)
        ]
