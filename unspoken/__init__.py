"""Interactive command line chat with an OpenAI-compatible model.

Type a message and press Enter; the whole conversation so far is sent with
every request and the reply is printed. End input (Ctrl-D) to quit.

Settings come from command line flags, ``~/.config/unspoken.toml`` (or the
file given with ``--config``) and the ``OPENAI_API_KEY`` environment variable.

Run `python -m unspoken` or use the `unspoken` console script.
"""
__version__ = "0.1.0"

# Re-export useful symbols for convenience
from .config import Settings, ConfigFile, resolve_settings, load_config
from .core import ChatSession, History
from .errors import ChatError, ConfigError
from .cli import ChatCLI, main, run_cli

__all__ = [
    "Settings",
    "ConfigFile",
    "resolve_settings",
    "load_config",
    "ChatSession",
    "History",
    "ChatError",
    "ConfigError",
    "ChatCLI",
    "main",
    "run_cli",
]
