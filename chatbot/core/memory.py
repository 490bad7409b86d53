"""In-process conversation memory.

History lives only for the lifetime of the process. The system prompt is
pinned as the first turn and older human/assistant turns are evicted once
the buffer grows past its capacity.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from chatbot.core.errors import InvalidConfig


logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 10


class Role(str, Enum):
    SYSTEM = "system"
    HUMAN = "human"
    ASSISTANT = "assistant"


class Turn(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class ConversationBuffer:
    """Ordered, size-bounded list of conversation turns."""

    def __init__(self, system_prompt: Optional[str] = None, capacity: int = DEFAULT_CAPACITY):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise InvalidConfig(f"History capacity must be a positive integer, got {capacity!r}")

        self._capacity = capacity
        self._system_prompt = system_prompt or None
        self._turns: List[Turn] = []
        if self._system_prompt:
            self._turns.append(Turn(role=Role.SYSTEM, content=self._system_prompt))

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def system_prompt(self) -> Optional[str]:
        return self._system_prompt

    def __len__(self) -> int:
        return len(self._turns)

    def append_human(self, content: str) -> None:
        self._turns.append(Turn(role=Role.HUMAN, content=content))

    def append_assistant(self, content: str) -> None:
        self._turns.append(Turn(role=Role.ASSISTANT, content=content))

    def snapshot(self) -> List[Turn]:
        return list(self._turns)

    def trim(self) -> None:
        """Drop the oldest non-system turns until the buffer fits its capacity.

        The system turn is never dropped, so a buffer holding only the
        system turn may stay above a capacity it cannot meet.
        """
        excess = len(self._turns) - self._capacity
        if excess <= 0:
            return

        kept: List[Turn] = []
        dropped = 0
        for idx in range(len(self._turns)):
            turn = self._turns[idx]
            if turn.role is not Role.SYSTEM and dropped < excess:
                dropped += 1
                continue
            kept.append(turn)

        # System turn first, remaining turns in their original order.
        self._turns = [t for t in kept if t.role is Role.SYSTEM] + [
            t for t in kept if t.role is not Role.SYSTEM
        ]
        logger.debug("Trimmed %s turns from history (now %s/%s)", dropped, len(self._turns), self._capacity)
