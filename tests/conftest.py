from __future__ import annotations

from typing import Optional

import pytest
from fastapi.testclient import TestClient

from studybuddy.modules.chat.models import ChatReply, ConversationTurn
from studybuddy.modules.llm.errors import BackendError
from studybuddy.modules.llm.registry import BackendRegistry


class FakeBackend:
    """Backend returning canned text and recording what it was sent."""

    def __init__(
        self,
        name: str = "openai",
        text: str = "",
        *,
        configured: bool = True,
        error: Optional[BackendError] = None,
    ) -> None:
        self.name = name
        self.text = text
        self.configured = configured
        self.error = error
        self.windows: list[list[ConversationTurn]] = []
        self.completions: list[dict] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def generate_chat_response(self, messages):
        self.windows.append(list(messages))
        if self.error:
            raise self.error
        return ChatReply(content=self.text or f"reply {len(self.windows)}", tokens_used=7)

    async def complete(self, prompt, *, temperature=0.3, max_tokens=1500):
        self.completions.append(
            {"prompt": prompt, "temperature": temperature, "max_tokens": max_tokens}
        )
        if self.error:
            raise self.error
        return self.text


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def registry(fake_backend) -> BackendRegistry:
    return BackendRegistry(
        {"openai": fake_backend, "llama": FakeBackend(name="llama", text="llama says hi")},
        default="openai",
    )


@pytest.fixture
def client(registry) -> TestClient:
    from main import create_app

    return TestClient(create_app(registry=registry))
