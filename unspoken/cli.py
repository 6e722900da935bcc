"""Interactive chat loop and command line entry point."""
from __future__ import annotations

import argparse
import logging
import os
import readline  # noqa: F401 – side-effect: history & line editing
import sys
from pathlib import Path
from typing import List, Mapping, Optional

import httpx
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .config import resolve_settings, home_dir
from .core import ChatSession
from .errors import ChatError, ConfigError, format_error
from .utils import (
    ERROR_STYLE,
    ASSISTANT_LABEL,
    ERROR_LABEL,
    USER_LABEL,
    Spinner,
    styled,
    console,
    err_console,
)

logger = logging.getLogger(__name__)


def print_error(target: Console, exc: BaseException) -> None:
    """Print *exc* and its cause chain as a labelled error line."""
    message = styled(escape(format_error(exc)), ERROR_STYLE)
    target.print(f"{ERROR_LABEL} {message}", highlight=False, emoji=False)

# ---------------------------------------------------------------------------
# Helper classes
# ---------------------------------------------------------------------------


class ChatCLI:
    """Read-eval-print loop over a single :class:`ChatSession`."""

    def __init__(
        self,
        session: ChatSession,
        stdout: Optional[Console] = None,
        stderr: Optional[Console] = None,
    ):
        self.session = session
        self.console = stdout if stdout is not None else console
        self.err_console = stderr if stderr is not None else err_console

    # ---------------- Output ---------------

    def print_reply(self, reply: str) -> None:
        # Replies are shown verbatim: no markup, no emoji shortcodes.
        self.console.print(
            f"\n{ASSISTANT_LABEL} {escape(reply)}\n",
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )

    def print_error(self, exc: BaseException) -> None:
        print_error(self.err_console, exc)

    # ---------------- Interaction loop ---------------

    def handle_line(self, line: str) -> None:
        """Send one user turn and print the outcome."""
        spinner = Spinner(text="waiting for reply", enabled=self.console.is_terminal)
        try:
            with spinner:
                reply = self.session.ask(line)
        except ChatError as exc:
            logger.debug("Exchange failed", exc_info=True)
            self.print_error(exc)
            return
        self.print_reply(reply)

    def repl(self) -> None:
        """Run until standard input is exhausted.

        Every line, empty ones included, is sent as a user turn. Failed
        exchanges are reported and the prompt comes back.
        """
        while True:
            try:
                line = self.console.input(f"{USER_LABEL} ")
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                break

            self.handle_line(line)


# ---------------------------------------------------------------------------
# Entrypoint helpers (keeping it separate simplifies __main__ handling)
# ---------------------------------------------------------------------------

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="unspoken",
        description=(
            "OpenAI chat API command line client. "
            "Command line options override the config file."
        ),
    )
    parser.add_argument(
        "--url", "-u",
        help='API url. Example: "https://models.inference.ai.azure.com/".',
    )
    parser.add_argument("--model", "-m", help='Model. Example: "gpt-4o".')
    parser.add_argument(
        "--system", "-s",
        help='System message to initialize the model. Example: "You are a helpful assistant."',
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Config file location. Default: $HOME/.config/unspoken.toml.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug information to stderr.",
    )
    parser.add_argument(
        "--version", "-V", action="version", version=f"%(prog)s {__version__}"
    )
    return parser.parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def main(
    argv: Optional[List[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
    http_client: Optional[httpx.Client] = None,
) -> int:
    """Resolve settings and run the chat loop. Returns the process exit code."""
    args = _parse_args(argv)
    _configure_logging(args.verbose)

    try:
        settings = resolve_settings(
            args.url,
            args.model,
            args.system,
            args.config,
            environ=os.environ if environ is None else environ,
            home=home_dir(),
        )
    except ConfigError as exc:
        print_error(err_console, exc)
        return 1

    logger.debug("Using %s with model %s", settings.api_url, settings.model)
    session = ChatSession.from_settings(settings, http_client=http_client)

    try:
        ChatCLI(session).repl()
    except KeyboardInterrupt:
        err_console.print()
        return 130
    return 0


def run_cli() -> None:  # pragma: no cover
    sys.exit(main())


if __name__ == "__main__":  # pragma: no cover
    run_cli()
