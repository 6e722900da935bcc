"""Spinner shown while waiting for the completion endpoint."""
from __future__ import annotations

from yaspin import yaspin


class Spinner:
    """Display a small spinner while work is done.

    Disabled spinners are no-ops, so callers can use one unconditionally and
    only switch it on when stdout is an interactive terminal.
    """

    def __init__(self, text: str = "", enabled: bool = True):
        self._spinner = yaspin(text=text, side="right") if enabled else None
        self._started = False

    def start(self) -> None:
        if self._started or self._spinner is None:
            return
        self._spinner.start()
        self._started = True

    def stop(self) -> None:
        if not self._started:
            return
        # yaspin clears its own line on stop
        self._spinner.stop()
        self._started = False

    def __enter__(self) -> "Spinner":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()
