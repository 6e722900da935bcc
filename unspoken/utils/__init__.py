from .ansi import (
    USER_LABEL,
    ASSISTANT_LABEL,
    ERROR_LABEL,
    ERROR_STYLE,
    console,
    err_console,
    styled,
)
from .spinner import Spinner

__all__ = [
    "USER_LABEL",
    "ASSISTANT_LABEL",
    "ERROR_LABEL",
    "ERROR_STYLE",
    "console",
    "err_console",
    "styled",
    "Spinner",
]
