"""Shared consoles and the coloured labels of the chat transcript."""

import os
from rich.console import Console


console = Console()
err_console = Console(stderr=True)

USER_STYLE = "bold red"
ASSISTANT_STYLE = "bold green"
ERROR_STYLE = "yellow"


def styled(text: str, style: str) -> str:
    """Wrap *text* in rich markup for *style*, or return it as-is under ``NO_COLOR``.

    *text* is inserted as markup; escape untrusted text first.
    """
    if os.getenv("NO_COLOR") is not None:
        return text
    return f"[{style}]{text}[/]"


USER_LABEL = styled("You:", USER_STYLE)
ASSISTANT_LABEL = styled("Assistant:", ASSISTANT_STYLE)
ERROR_LABEL = styled("Error:", ERROR_STYLE)
