"""AI CLI provider implementations for gencli."""

from .base import Provider, ProviderSpec, ProviderState, ProviderStatus
from .tools import CLAUDE, COPILOT, GEMINI, GH, PROVIDER_SPECS, create_providers

__all__ = [
    "Provider",
    "ProviderSpec",
    "ProviderState",
    "ProviderStatus",
    "PROVIDER_SPECS",
    "GH",
    "GEMINI",
    "COPILOT",
    "CLAUDE",
    "create_providers",
]
