"""Exceptions shared by the chat examples."""


class ChatbotError(Exception):
    """Base class for chatbot errors."""


class InvalidConfig(ChatbotError, ValueError):
    """Raised when a buffer or setting is configured with an unusable value."""


class ExchangeFailure(ChatbotError):
    """Raised when one user/model exchange cannot be completed."""
