from __future__ import annotations


class BackendError(Exception):
    """A model provider failed to produce a response."""

    def __init__(self, message: str, *, provider: str = "") -> None:
        super().__init__(message)
        self.provider = provider


class BackendTimeout(BackendError):
    """A model provider did not answer before the configured deadline."""
