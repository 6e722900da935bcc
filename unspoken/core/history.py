"""In-memory conversation history."""

from typing import Dict, List, Optional, Tuple

Message = Dict[str, str]

SYSTEM = "system"
USER = "user"
ASSISTANT = "assistant"


class History:
    """Ordered turns of a single conversation.

    The system message, if any, is the first turn and the only one with the
    ``system`` role. Turns are only ever appended; nothing is written to disk.
    """

    def __init__(self, system_message: Optional[str] = None) -> None:
        self.messages: List[Message] = []
        if system_message is not None:
            self.messages.append({"role": SYSTEM, "content": system_message})

    def __len__(self) -> int:
        return len(self.messages)

    @property
    def system_message(self) -> Optional[str]:
        if self.messages and self.messages[0]["role"] == SYSTEM:
            return self.messages[0]["content"]
        return None

    def add_user_message(self, content: str) -> None:
        self.messages.append({"role": USER, "content": content})

    def add_assistant_message(self, content: str) -> None:
        self.messages.append({"role": ASSISTANT, "content": content})

    def snapshot(self) -> Tuple[Message, ...]:
        """Return a copy of the turns that callers cannot mutate in place."""
        return tuple(dict(m) for m in self.messages)
