from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from studybuddy.modules.chat.models import Chat, ChatMessage


class SendMessageRequest(BaseModel):
    message: str = Field(..., description="Question for the study buddy")
    subject_id: Optional[str] = None
    context: Optional[str] = None
    llm: Optional[str] = Field(default=None, description="Provider name; default when omitted")


class SendMessageResponse(BaseModel):
    user_message: str
    ai_response: str
    timestamp: str
    subject_id: Optional[str] = None
    tokens_used: int = 0


class CreateChatRequest(BaseModel):
    user_id: str
    subject: str
    llm: str
    title: Optional[str] = None


class ChatResponse(BaseModel):
    chat: Chat


class ChatListResponse(BaseModel):
    chats: list[Chat] = Field(default_factory=list)


class MessagesResponse(BaseModel):
    messages: list[ChatMessage] = Field(default_factory=list)


class PostMessageRequest(BaseModel):
    sender: str = "user"
    content: str


class PostMessageResponse(BaseModel):
    ai_response: str
    tokens_used: int = 0
