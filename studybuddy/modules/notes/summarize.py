from __future__ import annotations

import math

from studybuddy.modules.llm.backends import ModelBackend


async def summarize_text(backend: ModelBackend, text: str, max_length: int = 200) -> str:
    """Summarize ``text`` in at most ``max_length`` words."""
    prompt = f"Summarize the following text in {max_length} words or less:\n\n{text}"
    return await backend.complete(
        prompt, temperature=0.3, max_tokens=math.ceil(max_length * 1.5)
    )
