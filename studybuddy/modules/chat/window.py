"""Bounded conversation windows for chat requests.

The window sent to a model is ``[system] + history + [current user turn]``.
When that exceeds ``max_turns`` the oldest history turns are dropped first;
the system prompt and the current message always survive.
"""

from __future__ import annotations

from typing import Iterable

from studybuddy.modules.chat.models import ConversationTurn, Role

DEFAULT_MAX_TURNS = 21


def build_window(
    system_prompt: str,
    prior_turns: Iterable[ConversationTurn],
    current_user_message: str,
    max_turns: int = DEFAULT_MAX_TURNS,
) -> list[ConversationTurn]:
    """Return the turns to forward to a model backend, newest history kept."""
    has_system = bool(system_prompt)
    reserved = 2 if has_system else 1
    max_turns = max(reserved, int(max_turns))

    history: list[ConversationTurn] = []
    for turn in prior_turns:
        if turn.role == Role.SYSTEM:
            if turn.content == system_prompt:
                continue
            # Only the designated prompt may lead the window
            turn = ConversationTurn(role=Role.USER, content=turn.content)
        history.append(turn)

    keep = max_turns - reserved
    history = history[-keep:] if keep else []

    window: list[ConversationTurn] = []
    if has_system:
        window.append(ConversationTurn(role=Role.SYSTEM, content=system_prompt))
    window.extend(history)
    window.append(ConversationTurn(role=Role.USER, content=current_user_message))
    return window
