"""Structured-output decoding exports."""

from .decoder import PayloadKind, decode, decode_flashcards, decode_quiz
from .errors import DecodeError

__all__ = [
    "DecodeError",
    "PayloadKind",
    "decode",
    "decode_flashcards",
    "decode_quiz",
]
