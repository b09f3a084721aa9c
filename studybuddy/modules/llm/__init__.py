"""Model backend exports."""

from .backends import ModelBackend, PydanticAIBackend, build_backend
from .errors import BackendError, BackendTimeout
from .registry import BackendRegistry

__all__ = [
    "BackendError",
    "BackendRegistry",
    "BackendTimeout",
    "ModelBackend",
    "PydanticAIBackend",
    "build_backend",
]
