from __future__ import annotations

import os
from functools import lru_cache
from typing import Mapping, Optional

from dotenv import load_dotenv

from chatbot.core.errors import InvalidConfig
from chatbot.core.memory import DEFAULT_CAPACITY
from chatbot.core.prompt import DEFAULT_SYSTEM_PROMPT


load_dotenv()


class Settings:
    """Provider connection, model and conversation settings for the chat examples.

    Values come from the process environment (or a `.env` file); pass `env`
    to read from another mapping instead.
    """

    def __init__(self, env: Optional[Mapping[str, str]] = None):
        source = os.environ if env is None else env

        self.log_level: str = source.get("LOG_LEVEL", "WARNING").upper()
        self.openai_api_key: Optional[str] = source.get("OPENAI_API_KEY") or None
        self.openai_model: str = source.get("OPENAI_MODEL", "gpt-4o-mini")
        self.openai_base_url: Optional[str] = source.get("OPENAI_BASE_URL") or None
        self.user_agent: Optional[str] = source.get("USER_AGENT_HEADER") or None
        self.temperature: float = _parse(float, source, "MODEL_TEMPERATURE", "1.0")
        self.history_capacity: int = _parse(int, source, "HISTORY_CAPACITY", str(DEFAULT_CAPACITY))
        self.system_prompt: str = source.get("SYSTEM_PROMPT", DEFAULT_SYSTEM_PROMPT)


def _parse(cast, source: Mapping[str, str], key: str, default: str):
    raw = source.get(key, default)
    try:
        return cast(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidConfig(f"{key} must be a {cast.__name__}, got {raw!r}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
