from .chat import Chat, ChatMessage, ChatReply, ConversationTurn, Role

__all__ = [
    "Chat",
    "ChatMessage",
    "ChatReply",
    "ConversationTurn",
    "Role",
]
