from __future__ import annotations

import logging
from typing import Callable, Optional

import typer

from chatbot.agent import build_chat_model
from chatbot.console import TerminalConsole
from chatbot.core.errors import InvalidConfig
from chatbot.core.loop import ChatLoop, ResponseProducer
from chatbot.core.memory import ConversationBuffer
from chatbot.responders import StreamingResponder, WholeResponder
from chatbot.translator import TranslationSession
from config.settings import Settings, get_settings


logger = logging.getLogger("chatbot")

app = typer.Typer(help="Interactive chat examples for an OpenAI-compatible API.", add_completion=False)


def _load_settings() -> Settings:
    try:
        return get_settings()
    except InvalidConfig as exc:
        typer.echo(f"❌ Invalid configuration: {exc}", err=True)
        raise typer.Exit(code=2)


def _build_model(settings: Settings):
    try:
        return build_chat_model(settings)
    except RuntimeError as exc:
        logger.error("Chat model could not be built: %s", exc)
        typer.echo(f"❌ {exc}", err=True)
        raise typer.Exit(code=1)


@app.callback()
def main() -> None:
    settings = _load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="[%(asctime)s] %(levelname)s - %(message)s",
    )
    logger.info("Config: model=%s key_set=%s", settings.openai_model, bool(settings.openai_api_key))


def _run_chat(
    make_producer: Callable[..., ResponseProducer],
    capacity: Optional[int],
    system_prompt: Optional[str],
) -> None:
    settings = _load_settings()
    try:
        buffer = ConversationBuffer(
            system_prompt=settings.system_prompt if system_prompt is None else system_prompt,
            capacity=settings.history_capacity if capacity is None else capacity,
        )
    except InvalidConfig as exc:
        typer.echo(f"❌ Invalid configuration: {exc}", err=True)
        raise typer.Exit(code=2)

    model = _build_model(settings)
    with TerminalConsole() as console:
        ChatLoop(make_producer(model), console).run(buffer)


@app.command()
def stream(
    capacity: Optional[int] = typer.Option(None, "--capacity", "-c", help="Maximum turns kept in history"),
    system_prompt: Optional[str] = typer.Option(None, "--system-prompt", "-s", help="System message for the conversation"),
):
    """Chat with replies streamed token by token."""
    _run_chat(StreamingResponder, capacity, system_prompt)


@app.command()
def chat(
    capacity: Optional[int] = typer.Option(None, "--capacity", "-c", help="Maximum turns kept in history"),
    system_prompt: Optional[str] = typer.Option(None, "--system-prompt", "-s", help="System message for the conversation"),
):
    """Chat with each reply shown once it is complete."""
    _run_chat(WholeResponder, capacity, system_prompt)


@app.command()
def translate():
    """Translate text with a prompt template."""
    settings = _load_settings()
    model = _build_model(settings)
    with TerminalConsole() as console:
        TranslationSession(model, console).run()


if __name__ == "__main__":
    app()
