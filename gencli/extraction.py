"""Recover a single shell command from free-form AI CLI output."""

import re
from enum import Enum
from typing import Optional

from .exceptions import ExtractionFailedError

TAGGED_PATTERN = re.compile(r"<command>(.*?)</command>", re.DOTALL)
FENCED_PATTERN = re.compile(r"```(?:bash|zsh|sh)?\n([\s\S]*?)```")
SUGGESTION_PATTERN = re.compile(r"Suggestion:[ \t]*\n\s*(.*?)(?:\n|$)")

SUGGESTION_HEADER = "Suggestion:"

# Interactive chrome printed by `gh copilot suggest`
UI_CHROME = (
    "Welcome to GitHub Copilot",
    "version",
    SUGGESTION_HEADER,
    "Select an option",
    "Use arrows",
    "Copy command",
    "Explain command",
    "Execute command",
    "Revise command",
    "Rate response",
    "Exit",
)


class ExtractionPolicy(str, Enum):
    """How hard a tool integration tries before giving up on its output."""

    STRICT = "strict"
    PERMISSIVE = "permissive"
    LINE_FILTER = "line_filter"


def extract_tagged(output: str) -> Optional[str]:
    """Return the inside of the first <command></command> span."""
    match = TAGGED_PATTERN.search(output)
    if match:
        return match.group(1).strip()
    return None


def extract_fenced(output: str) -> Optional[str]:
    """Return the body of the first fenced code block."""
    match = FENCED_PATTERN.search(output)
    if match:
        return match.group(1).strip()
    return None


def extract_suggestion(output: str) -> Optional[str]:
    """Return the line following a "Suggestion:" header."""
    match = SUGGESTION_PATTERN.search(output)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return None


def filter_lines(output: str) -> Optional[str]:
    """Return the first line that is not interactive UI chrome."""
    for line in output.splitlines():
        trimmed = line.strip()
        if len(trimmed) <= 1:
            continue
        if trimmed.startswith(">") or trimmed.startswith("?"):
            continue
        if any(marker in trimmed for marker in UI_CHROME):
            continue
        return trimmed
    return None


def extract_command(
    output: str,
    policy: ExtractionPolicy = ExtractionPolicy.PERMISSIVE,
    tool: str = "provider",
) -> str:
    """Extract a command from raw output using the strategies of ``policy``.

    Args:
        output: Raw standard output of the external tool
        policy: Which strategies to try, see ExtractionPolicy
        tool: Tool name used in the failure message

    Returns:
        The trimmed command string

    Raises:
        ExtractionFailedError: If a strict or line-filter policy finds nothing
    """
    command = extract_tagged(output)
    if command is not None:
        return command

    if policy == ExtractionPolicy.PERMISSIVE:
        command = extract_fenced(output)
        if command is not None:
            return command
        return output.strip()

    if policy == ExtractionPolicy.LINE_FILTER:
        command = extract_suggestion(output)
        if command is None:
            command = filter_lines(output)
        if command is not None:
            return command

    raise ExtractionFailedError(f"Could not extract command from {tool} response")
