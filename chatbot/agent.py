from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import httpx
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from chatbot.core.memory import Role, Turn
from config.settings import Settings, get_settings


logger = logging.getLogger(__name__)

_MESSAGE_TYPES = {
    Role.SYSTEM: SystemMessage,
    Role.HUMAN: HumanMessage,
    Role.ASSISTANT: AIMessage,
}


def build_chat_model(
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.Client] = None,
) -> ChatOpenAI:
    settings = settings or get_settings()
    if not settings.openai_api_key:
        raise RuntimeError(
            "OPENAI_API_KEY not set. Please configure it in environment or .env"
        )

    logger.info(
        "Building chat model: model=%s base_url=%s temperature=%s",
        settings.openai_model,
        settings.openai_base_url or "<default>",
        settings.temperature,
    )

    # No request timeout: a slow completion blocks until the provider answers.
    if http_client is None:
        http_client = httpx.Client(timeout=None)

    return ChatOpenAI(
        model=settings.openai_model,
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        temperature=settings.temperature,
        http_client=http_client,
        # Sent through the openai client so it replaces the SDK's own User-Agent.
        default_headers={"User-Agent": settings.user_agent} if settings.user_agent else None,
    )


def to_lc_messages(turns: Sequence[Turn]) -> List[BaseMessage]:
    return [_MESSAGE_TYPES[turn.role](content=turn.content) for turn in turns]


def message_text(message: BaseMessage) -> str:
    """Return the plain text of a message or chunk.

    Some providers return content as a list of blocks; only text blocks are kept.
    """
    content = message.content
    if isinstance(content, str):
        return content
    parts: List[str] = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text") or "")
    return "".join(parts)
