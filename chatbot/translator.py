from __future__ import annotations

import logging

from langchain_core.language_models import BaseChatModel
from langchain_core.prompts import ChatPromptTemplate

from chatbot.agent import message_text
from chatbot.console import Console
from chatbot.core.loop import EXIT_HINT, is_exit_command, report_failure
from chatbot.core.prompt import TRANSLATION_PROMPT


logger = logging.getLogger(__name__)

GOODBYE = "🤖 Goodbye! 👋"


class TranslationSession:
    """Prompt-template example: pick a language once, then translate line by line.

    No history is kept between translations; every request is rendered
    fresh from the template.
    """

    def __init__(
        self,
        model: BaseChatModel,
        console: Console,
        template: ChatPromptTemplate = TRANSLATION_PROMPT,
    ):
        self.model = model
        self.console = console
        self.template = template

    def run(self) -> None:
        try:
            self._run()
        finally:
            self.console.close()

    def _run(self) -> None:
        self.console.write_line("🤖 Prompt Template Translation Example")
        self.console.write_line(EXIT_HINT)
        self.console.write_line()

        try:
            language = self.console.read_line("Target language: ")
        except EOFError:
            self.console.write_line()
            return

        if is_exit_command(language):
            self.console.write_line()
            self.console.write_line(GOODBYE)
            return
        if not language.strip():
            self.console.write_line("❌ Language is required!")
            return

        self.console.write_line()
        self.console.write_line(f"✅ Translating to: {language}")
        self.console.write_line()
        logger.info("Translation session started: language=%s", language)

        while True:
            try:
                text = self.console.read_line("Text to translate: ")
            except EOFError:
                self.console.write_line()
                return
            except Exception as exc:
                report_failure(self.console, exc)
                continue

            if is_exit_command(text):
                self.console.write_line()
                self.console.write_line(GOODBYE)
                return
            if not text.strip():
                continue

            try:
                self.translate(language, text)
            except Exception as exc:
                report_failure(self.console, exc)

    def translate(self, language: str, text: str) -> str:
        prompt_value = self.template.invoke({"language": language, "text": text})

        self.console.write_line()
        self.console.write_line("📝 Generated Prompt:")
        for message in prompt_value.to_messages():
            self.console.write_line(f"  {message.type}: {message_text(message)}")

        self.console.write("\n🤖 Translation: ")
        response = self.model.invoke(prompt_value)
        translation = message_text(response)
        self.console.write_line(translation)
        self.console.write_line()
        return translation
