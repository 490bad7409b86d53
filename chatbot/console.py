"""Terminal input/output used by the interactive examples."""

from __future__ import annotations

from typing import Protocol

import typer


class Console(Protocol):
    def read_line(self, prompt: str) -> str: ...

    def write(self, text: str) -> None: ...

    def write_line(self, text: str = "") -> None: ...

    def error(self, text: str) -> None: ...

    def close(self) -> None: ...


class TerminalConsole:
    """Line-oriented console on top of typer's prompt/echo helpers.

    Reading after ``close()`` or hitting end of input raises ``EOFError``.
    """

    def __init__(self):
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def read_line(self, prompt: str) -> str:
        if self._closed:
            raise EOFError("console is closed")
        try:
            # An empty default lets blank lines through instead of re-prompting.
            return typer.prompt(
                prompt.rstrip().rstrip(":"),
                default="",
                show_default=False,
                prompt_suffix=": ",
            )
        except typer.Abort as exc:
            raise EOFError("input aborted") from exc

    def write(self, text: str) -> None:
        typer.echo(text, nl=False)

    def write_line(self, text: str = "") -> None:
        typer.echo(text)

    def error(self, text: str) -> None:
        typer.echo(text, err=True)

    def close(self) -> None:
        self._closed = True

    def __enter__(self) -> "TerminalConsole":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
