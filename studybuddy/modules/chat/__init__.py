"""Chat module exports."""

from .models import ChatReply, ConversationTurn, Role
from .service import ChatService
from .store import ChatStore
from .window import DEFAULT_MAX_TURNS, build_window

__all__ = [
    "ChatReply",
    "ChatService",
    "ChatStore",
    "ConversationTurn",
    "DEFAULT_MAX_TURNS",
    "Role",
    "build_window",
]
