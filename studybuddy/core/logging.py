import logging
import os
from typing import Optional


DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | [%(provider)s] %(message)s"

# Client libraries that log every HTTP request to the model providers
_CHATTY_LOGGERS = ("httpx", "openai", "google_genai")


class ProviderFilter(logging.Filter):
    """Fills ``provider`` on records logged without ``extra={"provider": ...}``."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if not getattr(record, "provider", None):
            record.provider = "-"
        return True


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Configure the root logger once for the API process or the CLI."""
    resolved_level = getattr(logging, (level or DEFAULT_LEVEL), logging.INFO)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
    handler.addFilter(ProviderFilter())

    root = logging.getLogger()
    root.setLevel(resolved_level)
    # uvicorn --reload re-imports main; avoid stacking handlers
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved_level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)
