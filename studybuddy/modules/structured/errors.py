from __future__ import annotations


class DecodeError(Exception):
    """Raised when no structured payload can be recovered from model output."""

    def __init__(self, reason: str = "invalid-json", raw_text: str = "") -> None:
        super().__init__(reason)
        self.reason = reason
        self.raw_text = raw_text
