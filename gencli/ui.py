"""Shared UI helpers for console output."""

import logging

from rich.console import Console
from rich.logging import RichHandler

# Shared console instances so Rich live displays and prompts coordinate correctly.
# Generated commands go to stdout; everything else goes to stderr so that shell
# integrations can capture the command alone.
console = Console()
err_console = Console(stderr=True)


def setup_logging(level: str = "warning") -> None:
    """Route gencli log records through Rich on stderr."""
    handler = RichHandler(console=err_console, show_time=False, show_path=False)
    root = logging.getLogger("gencli")
    root.handlers = [handler]
    root.setLevel(level.upper())
    root.propagate = False


def configure_output(rich_output: bool = True) -> None:
    """Strip colour and styling from both consoles when rich output is off."""
    for target in (console, err_console):
        target.no_color = not rich_output
