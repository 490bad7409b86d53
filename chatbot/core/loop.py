"""Read-eval-print loop for the chat examples."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol, Sequence

from chatbot.console import Console
from chatbot.core.memory import ConversationBuffer, Turn


logger = logging.getLogger(__name__)

EXIT_COMMANDS = frozenset({"exit", "quit", "bye"})

WELCOME_BANNER = "🤖 Welcome to the Interactive AI Chatbot!"
EXIT_HINT = '💡 Type "exit", "quit", or "bye" to end the conversation.'
FAREWELL = "🤖 AI: Goodbye! Have a great day! 👋"


def is_exit_command(text: str) -> bool:
    return str(text).strip().lower() in EXIT_COMMANDS


def report_failure(console: Console, exc: Exception) -> None:
    logger.warning("Exchange failed: %s", exc, exc_info=logger.isEnabledFor(logging.DEBUG))
    console.error(f"❌ Error: {str(exc) or type(exc).__name__}")
    console.write_line("Please try again.")
    console.write_line()


class ResponseProducer(Protocol):
    """Shows a reply for the given turns and returns its full text."""

    def produce(self, turns: Sequence[Turn], console: Console) -> str: ...


class LoopState(str, Enum):
    AWAITING_INPUT = "awaiting_input"
    PROCESSING = "processing"
    TERMINATED = "terminated"


class ChatLoop:
    """Interactive chat over a bounded conversation buffer.

    The response producer decides how replies are displayed (streamed or
    whole); the loop records each completed reply in the buffer and trims
    it afterwards. A failed exchange is reported and the loop keeps going.
    The console is closed when the loop terminates.
    """

    def __init__(self, producer: ResponseProducer, console: Console):
        self.producer = producer
        self.console = console
        self.state = LoopState.AWAITING_INPUT

    def run(self, buffer: ConversationBuffer) -> None:
        self.console.write_line(WELCOME_BANNER)
        self.console.write_line(EXIT_HINT)
        self.console.write_line()

        try:
            while self.state is not LoopState.TERMINATED:
                self._step(buffer)
        finally:
            self.state = LoopState.TERMINATED
            self.console.close()

    def _step(self, buffer: ConversationBuffer) -> None:
        self.state = LoopState.AWAITING_INPUT
        try:
            user_input = self.console.read_line("You: ")
        except EOFError:
            logger.info("Input closed, leaving chat loop")
            self.console.write_line()
            self.state = LoopState.TERMINATED
            return
        except Exception as exc:
            report_failure(self.console, exc)
            return

        if is_exit_command(user_input):
            self.console.write_line()
            self.console.write_line(FAREWELL)
            self.state = LoopState.TERMINATED
            return

        if not str(user_input).strip():
            return

        self.state = LoopState.PROCESSING
        try:
            buffer.append_human(user_input)
            self.console.write("🤖 AI: ")
            reply = self.producer.produce(buffer.snapshot(), self.console)
            buffer.append_assistant(reply)
            buffer.trim()
        except Exception as exc:
            report_failure(self.console, exc)
        finally:
            self.state = LoopState.AWAITING_INPUT
