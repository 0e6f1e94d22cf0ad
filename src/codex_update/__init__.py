"""Self-update support for the codex command-line tool."""

__version__ = "0.27.0"
