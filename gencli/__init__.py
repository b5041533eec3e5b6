"""Gen - shell commands from natural language.

This package turns a natural-language request into a single shell command by
delegating to an externally installed AI CLI tool:

- gh: GitHub CLI with the Copilot extension
- gemini: Gemini CLI
- copilot: Copilot CLI
- claude: Claude CLI

Providers are tried in that order unless the user pins one with
`gen provider -set <name>` or picks one per call with `-p <name>`.
The generated command is printed, never executed.
"""

from .config import ConfigStore, GenSettings
from .orchestrator import GenOrchestrator
from .providers import Provider, ProviderState, ProviderStatus

__version__ = "0.1.0"
__author__ = "Gen CLI Team"

__all__ = [
    "GenOrchestrator",
    "GenSettings",
    "ConfigStore",
    "Provider",
    "ProviderState",
    "ProviderStatus",
]
