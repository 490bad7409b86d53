import subprocess
import sys
from pathlib import Path

import pytest

from chatbot.core.errors import ExchangeFailure
from chatbot.core.loop import ChatLoop, LoopState, is_exit_command
from chatbot.core.memory import ConversationBuffer, Role


class RecordingProducer:
    def __init__(self, replies=("ok",), error=None):
        self.replies = list(replies)
        self.error = error
        self.calls = []

    def produce(self, turns, console):
        self.calls.append(list(turns))
        if self.error is not None:
            raise self.error
        reply = self.replies.pop(0)
        console.write_line(reply)
        return reply


@pytest.mark.parametrize("text", ["exit", "EXIT", "  Quit ", "BYE", "bye\n", "\tExit\t"])
def test_exit_commands_are_case_and_whitespace_insensitive(text: str) -> None:
    assert is_exit_command(text)


@pytest.mark.parametrize("text", ["exiting", "goodbye", "qui t", "", "   "])
def test_other_input_is_not_an_exit_command(text: str) -> None:
    assert not is_exit_command(text)


def test_exchange_records_human_and_assistant_turns(make_console) -> None:
    console = make_console(["hello", "exit"])
    producer = RecordingProducer(replies=["hei"])
    buffer = ConversationBuffer(system_prompt="S")

    loop = ChatLoop(producer, console)
    loop.run(buffer)

    assert [(t.role, t.content) for t in buffer.snapshot()] == [
        (Role.SYSTEM, "S"),
        (Role.HUMAN, "hello"),
        (Role.ASSISTANT, "hei"),
    ]
    # Producer sees the human turn but not yet its own reply.
    assert [t.content for t in producer.calls[0]] == ["S", "hello"]
    assert loop.state is LoopState.TERMINATED
    assert console.closed
    assert "Goodbye! Have a great day!" in console.text


def test_exit_command_stops_before_touching_buffer(make_console) -> None:
    console = make_console(["  BYE ", "never read"])
    producer = RecordingProducer()
    buffer = ConversationBuffer(system_prompt="S")

    ChatLoop(producer, console).run(buffer)

    assert len(buffer) == 1
    assert producer.calls == []
    assert console.prompts == ["You: "]


def test_blank_input_is_skipped(make_console) -> None:
    console = make_console(["", "   ", "\t", "quit"])
    producer = RecordingProducer()
    buffer = ConversationBuffer()

    ChatLoop(producer, console).run(buffer)

    assert len(buffer) == 0
    assert producer.calls == []
    assert len(console.prompts) == 4


def test_failed_exchange_keeps_human_turn_and_continues(make_console) -> None:
    console = make_console(["hello", "again", "exit"])
    producer = RecordingProducer(error=ExchangeFailure("provider down"))
    buffer = ConversationBuffer(system_prompt="S")

    loop = ChatLoop(producer, console)
    loop.run(buffer)

    assert [(t.role, t.content) for t in buffer.snapshot()] == [
        (Role.SYSTEM, "S"),
        (Role.HUMAN, "hello"),
        (Role.HUMAN, "again"),
    ]
    assert len(producer.calls) == 2
    assert console.errors == ["❌ Error: provider down", "❌ Error: provider down"]
    assert console.text.count("Please try again.") == 2
    assert loop.state is LoopState.TERMINATED


def test_input_failure_is_reported_and_loop_continues(make_console) -> None:
    console = make_console([OSError("read failed"), "exit"])

    ChatLoop(RecordingProducer(), console).run(ConversationBuffer())

    assert console.errors == ["❌ Error: read failed"]
    assert len(console.prompts) == 2


def test_end_of_input_terminates_and_closes_console(make_console) -> None:
    console = make_console(["hello"])
    buffer = ConversationBuffer()

    loop = ChatLoop(RecordingProducer(replies=["hi"]), console)
    loop.run(buffer)

    assert loop.state is LoopState.TERMINATED
    assert console.closed
    assert len(buffer) == 2


def test_history_is_trimmed_after_each_exchange(make_console) -> None:
    console = make_console(["a", "b", "c", "exit"])
    producer = RecordingProducer(replies=["1", "2", "3"])
    buffer = ConversationBuffer(system_prompt="S", capacity=3)

    ChatLoop(producer, console).run(buffer)

    assert [t.content for t in buffer.snapshot()] == ["S", "c", "3"]
    # Before the third exchange the buffer had been trimmed to capacity.
    assert [t.content for t in producer.calls[2]] == ["S", "b", "2", "c"]


def test_interrupt_during_exchange_still_closes_console(make_console) -> None:
    console = make_console(["hello"])
    producer = RecordingProducer(error=KeyboardInterrupt())

    loop = ChatLoop(producer, console)
    with pytest.raises(KeyboardInterrupt):
        loop.run(ConversationBuffer())

    assert console.closed
    assert loop.state is LoopState.TERMINATED


def test_welcome_banner_names_exit_commands(make_console) -> None:
    console = make_console(["exit"])
    ChatLoop(RecordingProducer(), console).run(ConversationBuffer())
    assert console.output[0].startswith("🤖 Welcome")
    assert '"exit", "quit", or "bye"' in console.text


def test_loop_module_does_not_load_provider_stack() -> None:
    code = (
        "import sys, chatbot.core.loop; "
        "print(sorted(m for m in ('langchain_openai', 'httpx', 'config.settings') if m in sys.modules))"
    )
    result = subprocess.run(
        [sys.executable, "-c", code],
        cwd=Path(__file__).resolve().parent.parent,
        capture_output=True,
        text=True,
        check=True,
    )
    assert result.stdout.strip() == "[]"
