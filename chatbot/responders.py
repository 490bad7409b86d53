"""Strategies that turn a conversation snapshot into a displayed reply."""

from __future__ import annotations

import logging
from typing import List, Sequence

from langchain_core.language_models import BaseChatModel

from chatbot.agent import message_text, to_lc_messages
from chatbot.console import Console
from chatbot.core.errors import ExchangeFailure
from chatbot.core.memory import Turn


logger = logging.getLogger(__name__)


class StreamingResponder:
    """Print fragments as they arrive and return the assembled reply."""

    def __init__(self, model: BaseChatModel):
        self.model = model

    def produce(self, turns: Sequence[Turn], console: Console) -> str:
        fragments: List[str] = []
        try:
            for chunk in self.model.stream(to_lc_messages(turns)):
                text = message_text(chunk)
                if not text:
                    continue
                fragments.append(text)
                console.write(text)
        except Exception as exc:
            raise ExchangeFailure(f"Streaming response failed: {exc}") from exc

        console.write_line()
        console.write_line()
        logger.info("Streamed reply: %s fragments, %s chars", len(fragments), sum(map(len, fragments)))
        return "".join(fragments)


class WholeResponder:
    """Wait for the complete reply, then print it once."""

    def __init__(self, model: BaseChatModel):
        self.model = model

    def produce(self, turns: Sequence[Turn], console: Console) -> str:
        try:
            response = self.model.invoke(to_lc_messages(turns))
        except Exception as exc:
            raise ExchangeFailure(f"Model call failed: {exc}") from exc

        text = message_text(response)
        console.write_line(text)
        console.write_line()
        logger.info("Model replied with %s chars", len(text))
        return text
