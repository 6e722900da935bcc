"""Exception types and error formatting."""

from __future__ import annotations

from typing import List


class UnspokenError(Exception):
    """Base class for errors reported to the user."""


class ConfigError(UnspokenError):
    """Settings could not be resolved. Fatal at startup."""


class ChatError(UnspokenError):
    """A single request/response exchange failed. The session keeps going."""


def cause_chain(exc: BaseException) -> List[BaseException]:
    """Return *exc* followed by every exception it was raised ``from``."""
    chain: List[BaseException] = []
    current: BaseException | None = exc
    while current is not None and current not in chain:
        chain.append(current)
        current = current.__cause__
    return chain


def format_error(exc: BaseException) -> str:
    """Render *exc* with a ``Caused by:`` list for its cause chain."""
    head, *causes = cause_chain(exc)
    lines = [str(head) or type(head).__name__]
    if causes:
        lines.append("")
        lines.append("Caused by:")
        for cause in causes:
            lines.append(f"    {str(cause) or type(cause).__name__}")
    return "\n".join(lines)
