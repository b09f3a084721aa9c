"""Model backends used by chat, quiz, flashcard and summary flows.

Every provider is reached through pydantic-ai so that swapping OpenAI for the
SambaNova Llama endpoint or Gemini changes nothing for callers. Provider
imports stay lazy to avoid import-time errors when credentials are missing.
"""

from __future__ import annotations

import asyncio
from typing import Optional, Protocol

from pydantic_ai import Agent
from pydantic_ai.exceptions import AgentRunError
from pydantic_ai.messages import (
    ModelMessage,
    ModelRequest,
    ModelResponse,
    SystemPromptPart,
    TextPart,
    UserPromptPart,
)
from pydantic_ai.models import Model
from pydantic_ai.settings import ModelSettings

from studybuddy.core.config import LLMSettings
from studybuddy.core.logging import get_logger
from studybuddy.modules.chat.models import ChatReply, ConversationTurn, Role
from studybuddy.modules.llm.errors import BackendError, BackendTimeout

logger = get_logger(__name__)

DEMO_REPLY = (
    "I'm sorry, but I'm currently in demo mode. The {provider} API key is not "
    "configured. Please set up your API key to enable AI responses."
)


class ModelBackend(Protocol):
    name: str

    @property
    def is_configured(self) -> bool: ...

    async def generate_chat_response(
        self, messages: list[ConversationTurn]
    ) -> ChatReply: ...

    async def complete(
        self, prompt: str, *, temperature: float = 0.3, max_tokens: int = 1500
    ) -> str: ...


def to_model_messages(
    turns: list[ConversationTurn],
) -> tuple[list[ModelMessage], str]:
    """Split a window into pydantic-ai history and the final user prompt."""
    if not turns:
        raise ValueError("conversation window is empty")
    *earlier, last = turns
    history: list[ModelMessage] = []
    for turn in earlier:
        if turn.role == Role.SYSTEM:
            history.append(ModelRequest(parts=[SystemPromptPart(content=turn.content)]))
        elif turn.role == Role.USER:
            history.append(ModelRequest(parts=[UserPromptPart(content=turn.content)]))
        else:
            history.append(ModelResponse(parts=[TextPart(content=turn.content)]))
    return history, last.content


class PydanticAIBackend:
    """Backend driving any pydantic-ai ``Model``; ``model=None`` means demo mode."""

    def __init__(
        self,
        name: str,
        model: Optional[Model],
        *,
        timeout_seconds: float = 45.0,
        chat_settings: Optional[ModelSettings] = None,
        extra_settings: Optional[ModelSettings] = None,
    ) -> None:
        self.name = name
        self.model = model
        self.timeout_seconds = timeout_seconds
        self.chat_settings: ModelSettings = chat_settings or ModelSettings(
            temperature=0.7, max_tokens=1000
        )
        self.extra_settings: ModelSettings = extra_settings or ModelSettings()

    @property
    def is_configured(self) -> bool:
        return self.model is not None

    async def _run(
        self,
        prompt: str,
        history: list[ModelMessage],
        model_settings: ModelSettings,
    ):
        if self.model is None:
            raise BackendError(f"{self.name} backend is not configured", provider=self.name)
        agent: Agent[None, str] = Agent(self.model, output_type=str)
        merged = ModelSettings(**{**model_settings, **self.extra_settings})
        try:
            return await asyncio.wait_for(
                agent.run(prompt, message_history=history or None, model_settings=merged),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error(
                "Model call timed out after %.0fs",
                self.timeout_seconds,
                extra={"provider": self.name},
            )
            raise BackendTimeout(
                f"{self.name} did not respond within {self.timeout_seconds:.0f}s",
                provider=self.name,
            ) from e
        except AgentRunError as e:
            logger.error("Model call failed: %s", e, extra={"provider": self.name})
            raise BackendError(
                f"Failed to generate {self.name} response", provider=self.name
            ) from e

    async def generate_chat_response(
        self, messages: list[ConversationTurn]
    ) -> ChatReply:
        if self.model is None:
            logger.info(
                "Client not configured - returning placeholder response",
                extra={"provider": self.name},
            )
            return ChatReply(content=DEMO_REPLY.format(provider=self.name), tokens_used=0)
        history, prompt = to_model_messages(messages)
        res = await self._run(prompt, history, self.chat_settings)
        return ChatReply(content=res.output, tokens_used=res.usage.total_tokens or 0)

    async def complete(
        self, prompt: str, *, temperature: float = 0.3, max_tokens: int = 1500
    ) -> str:
        res = await self._run(
            prompt, [], ModelSettings(temperature=temperature, max_tokens=max_tokens)
        )
        return res.output


def _build_openai_model(cfg: LLMSettings) -> Optional[Model]:
    """Build the OpenAI chat model (lazy import)."""
    if not cfg.openai_api_key:
        return None
    from pydantic_ai.models.openai import OpenAIChatModel
    from pydantic_ai.providers.openai import OpenAIProvider

    provider = OpenAIProvider(api_key=cfg.openai_api_key)
    return OpenAIChatModel(cfg.openai_model, provider=provider)


def _build_llama_model(cfg: LLMSettings) -> Optional[Model]:
    """Build Llama on SambaNova via the OpenAI-compatible provider (lazy import)."""
    if not cfg.sambanova_api_key:
        return None
    from pydantic_ai.models.openai import OpenAIChatModel
    from pydantic_ai.providers.openai import OpenAIProvider

    provider = OpenAIProvider(
        api_key=cfg.sambanova_api_key,
        base_url=cfg.sambanova_base_url,
    )
    return OpenAIChatModel(cfg.llama_model, provider=provider)


def _build_google_model(cfg: LLMSettings) -> Optional[Model]:
    """Build the Google Gemini model (lazy import)."""
    if not cfg.gemini_api_key:
        return None
    from pydantic_ai.models.google import GoogleModel
    from pydantic_ai.providers.google import GoogleProvider

    provider = GoogleProvider(api_key=cfg.gemini_api_key)
    return GoogleModel(cfg.gemini_model, provider=provider)


_BUILDERS = {
    "openai": _build_openai_model,
    "llama": _build_llama_model,
    "google": _build_google_model,
}

PROVIDERS = tuple(_BUILDERS)


def build_backend(name: str, cfg: LLMSettings) -> PydanticAIBackend:
    builder = _BUILDERS.get(name)
    if builder is None:
        raise ValueError("unsupported_llm")
    model = builder(cfg)
    if model is None:
        logger.warning(
            "API key not configured - backend will run in demo mode",
            extra={"provider": name},
        )
    extra = ModelSettings(top_p=0.1) if name == "llama" else None
    return PydanticAIBackend(
        name,
        model,
        timeout_seconds=cfg.timeout_seconds,
        chat_settings=ModelSettings(
            temperature=cfg.chat_temperature, max_tokens=cfg.chat_max_tokens
        ),
        extra_settings=extra,
    )
