"""Descriptors for the supported AI CLI tools, in fallback order."""

from typing import List, Optional

from ..cache import CommandCache
from ..extraction import ExtractionPolicy
from ..process import ProcessRunner
from .base import Provider, ProviderSpec

BASE_PROMPT = (
    "You are an expert bash command generator for zsh on macOS. Generate a "
    "precise bash command that accomplishes the user's request. Use "
    "zsh-specific syntax when relevant, optimize for macOS compatibility, "
    "prefer commonly available tools, and include necessary error handling."
)
TAG_INSTRUCTION = (
    "IMPORTANT: Return the command wrapped in <command></command> tags with "
    "no explanations."
)
NO_EXTRAS = (
    "Do not include any explanations or additional information. Do not use "
    "any tools you don't need to explore for context."
)

AGENT_PROMPT = f"{BASE_PROMPT} {NO_EXTRAS} {TAG_INSTRUCTION}"

GH = ProviderSpec(
    name="gh",
    display_name="GitHub Copilot",
    detect_command=("gh", "--version"),
    version_pattern=r"gh version (\d+\.\d+\.\d+)",
    min_version="2.0.0",
    auth_command=("gh", "auth", "status"),
    auth_marker="Logged in to github.com",
    # "exit" on stdin leaves the interactive menu without touching the clipboard
    invoke_command=("gh", "copilot", "suggest", "-t", "shell", "{prompt}"),
    invoke_input="exit\n",
    system_prompt=AGENT_PROMPT,
    extraction=ExtractionPolicy.LINE_FILTER,
    internal=True,
    timeout=30,
)

GEMINI = ProviderSpec(
    name="gemini",
    display_name="Gemini CLI",
    detect_command=("gemini", "--version"),
    version_pattern=r"(\d+\.\d+\.\d+)",
    min_version="0.1.13",
    auth_command=("gemini", "-p", "hi"),
    auth_marker="Loaded cached credentials.",
    auth_timeout=10,
    invoke_command=("gemini", "-p", "{prompt}"),
    system_prompt=f"{BASE_PROMPT} {TAG_INSTRUCTION}",
    extraction=ExtractionPolicy.STRICT,
    timeout=30,
)

COPILOT = ProviderSpec(
    name="copilot",
    display_name="Copilot",
    detect_command=("which", "copilot"),
    invoke_command=("copilot", "-p", "{prompt}"),
    system_prompt=AGENT_PROMPT,
    extraction=ExtractionPolicy.PERMISSIVE,
    timeout=10,
)

CLAUDE = ProviderSpec(
    name="claude",
    display_name="Claude",
    detect_command=("which", "claude"),
    invoke_command=("claude", "-p", "--model", "{model}", "{prompt}"),
    model="haiku",
    system_prompt=AGENT_PROMPT,
    extraction=ExtractionPolicy.PERMISSIVE,
    timeout=10,
)

PROVIDER_SPECS = (GH, GEMINI, COPILOT, CLAUDE)


def create_providers(
    runner: Optional[ProcessRunner] = None,
    cache: Optional[CommandCache] = None,
    timeout_override: Optional[float] = None,
) -> List[Provider]:
    """Build one Provider per registered tool, sharing runner and cache."""
    runner = runner or ProcessRunner()
    cache = cache if cache is not None else CommandCache()
    return [
        Provider(spec, runner=runner, cache=cache, timeout=timeout_override)
        for spec in PROVIDER_SPECS
    ]
