from .history import History, Message
from .client import ChatSession

__all__ = [
    "ChatSession",
    "History",
    "Message",
]
