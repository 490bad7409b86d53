from __future__ import annotations

from typing import Iterable, List, Optional

import pytest
from langchain_core.messages import AIMessage, AIMessageChunk


class ScriptedConsole:
    """Console double fed from a list of lines; exceptions in the list are raised."""

    def __init__(self, lines: Iterable):
        self._lines = list(lines)
        self.output: List[str] = []
        self.errors: List[str] = []
        self.prompts: List[str] = []
        self.closed = False

    def read_line(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._lines:
            raise EOFError
        line = self._lines.pop(0)
        if isinstance(line, BaseException):
            raise line
        return line

    def write(self, text: str) -> None:
        self.output.append(text)

    def write_line(self, text: str = "") -> None:
        self.output.append(text + "\n")

    def error(self, text: str) -> None:
        self.errors.append(text)

    def close(self) -> None:
        self.closed = True

    @property
    def text(self) -> str:
        return "".join(self.output)


class FragmentModel:
    """Chat model double returning fixed fragments and recording what it was sent."""

    def __init__(self, fragments: Iterable[str] = (), error: Optional[Exception] = None):
        self.fragments = list(fragments)
        self.error = error
        self.calls: List[list] = []

    def stream(self, messages):
        self.calls.append(list(messages))
        for fragment in self.fragments:
            if self.error is not None and fragment == "<boom>":
                raise self.error
            yield AIMessageChunk(content=fragment)

    def invoke(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return AIMessage(content="".join(self.fragments))


@pytest.fixture
def make_console():
    return ScriptedConsole


@pytest.fixture
def make_model():
    return FragmentModel
