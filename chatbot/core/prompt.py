from __future__ import annotations

from langchain_core.prompts import ChatPromptTemplate


DEFAULT_SYSTEM_PROMPT = (
    "Translate the following from English into Finnish, Don't translate any other language"
)

TRANSLATION_SYSTEM_PROMPT = "Translate the following from English into {language}"

TRANSLATION_PROMPT = ChatPromptTemplate.from_messages(
    [
        ("system", TRANSLATION_SYSTEM_PROMPT),
        ("user", "{text}"),
    ]
)
