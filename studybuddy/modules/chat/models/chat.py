from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ConversationTurn(BaseModel):
    role: Role = Field(..., description="Author of the turn: system, user or assistant")
    content: str = Field(..., description="Text of the turn")


class ChatReply(BaseModel):
    content: str = Field(..., description="Text returned by the model backend")
    tokens_used: int = Field(default=0, description="Total tokens reported by the provider")


class ChatMessage(BaseModel):
    chat_id: str = Field(..., description="Unique identifier for the chat")
    id: str = Field(..., description="Unique identifier for the message, sequential")
    sender: Role = Field(..., description="Either user or assistant")
    content: str = Field(..., description="Content of the message")
    model: str = Field(..., description="Provider that the owning chat is bound to")
    created_at: str = Field(..., description="Timestamp of the message")


class Chat(BaseModel):
    id: str = Field(..., description="Unique identifier for the chat")
    user_id: str = Field(..., description="Owner of the chat")
    subject: str = Field(..., description="Subject the chat belongs to")
    llm: str = Field(..., description="Provider answering in this chat")
    title: str | None = Field(default=None, description="Optional display title")
    created_at: str = Field(..., description="Timestamp of the chat")
