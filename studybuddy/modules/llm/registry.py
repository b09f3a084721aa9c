from __future__ import annotations

from typing import Mapping, Optional

from studybuddy.core.config import LLMSettings
from studybuddy.modules.llm.backends import PROVIDERS, ModelBackend, build_backend


class BackendRegistry:
    """Named model backends plus the default used when a caller names none."""

    def __init__(self, backends: Mapping[str, ModelBackend], default: str) -> None:
        if default not in backends:
            raise ValueError(f"default backend '{default}' is not registered")
        self._backends = dict(backends)
        self.default = default

    @classmethod
    def from_settings(cls, cfg: LLMSettings) -> "BackendRegistry":
        backends = {name: build_backend(name, cfg) for name in PROVIDERS}
        default = (cfg.model_provider or "openai").lower()
        if default not in backends:
            default = "openai"
        return cls(backends, default=default)

    def names(self) -> list[str]:
        return list(self._backends)

    def supports(self, name: str) -> bool:
        return name in self._backends

    def get(self, name: Optional[str] = None) -> ModelBackend:
        backend = self._backends.get(name or self.default)
        if backend is None:
            raise ValueError("unsupported_llm")
        return backend
