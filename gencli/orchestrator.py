"""Provider selection and command generation."""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from .config import ConfigStore
from .context import SystemContext, gather_system_context
from .exceptions import (
    NoProviderAvailableError,
    NotAuthenticatedError,
    NotInstalledError,
    ProviderNotFoundError,
    ProviderUnavailableError,
)
from .providers import Provider, ProviderState, ProviderStatus

logger = logging.getLogger(__name__)

AUTO = "auto"


def _unavailable(message: str, status: ProviderStatus) -> ProviderUnavailableError:
    if status.state == ProviderState.NOT_INSTALLED:
        return NotInstalledError(message)
    if status.state == ProviderState.NOT_AUTHENTICATED:
        return NotAuthenticatedError(message)
    return ProviderUnavailableError(message)


class GenOrchestrator:
    """Resolves a provider and asks it for a command.

    Providers are tried in the order given; that order is the auto-detect
    priority.
    """

    def __init__(
        self,
        providers: Sequence[Provider],
        config_store: ConfigStore,
        context_source: Callable[[], SystemContext] = gather_system_context,
    ):
        names = [p.name for p in providers]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate provider names: {', '.join(duplicates)}")

        self.providers = list(providers)
        self.config_store = config_store
        self.context_source = context_source

    def public_names(self) -> List[str]:
        return [p.name for p in self.providers if not p.internal]

    def get_provider(self, name: str) -> Optional[Provider]:
        for provider in self.providers:
            if provider.name == name:
                return provider
        return None

    def current_provider(self) -> Optional[str]:
        return self.config_store.get_provider()

    async def find_available_provider(self) -> Provider:
        """Return the preferred provider if set, else the first ready one."""
        preferred = self.config_store.get_provider()

        if preferred:
            provider = self.get_provider(preferred)
            if provider is not None:
                status = await provider.get_status()
                if status.is_ready:
                    return provider
                message = f"Preferred provider '{preferred}' is {status.state.value}"
                if status.message:
                    message += f": {status.message}"
                raise _unavailable(message, status)
            logger.debug("Preferred provider '%s' is not registered, auto-detecting", preferred)

        for provider in self.providers:
            status = await provider.get_status()
            logger.debug("Provider %s: %s", provider.name, status.describe())
            if status.is_ready:
                return provider

        message = "No available providers found."
        names = self.public_names()
        if names:
            message += (
                " Please install and authenticate any of the following:\n- "
                + "\n- ".join(names)
            )
        raise NoProviderAvailableError(message)

    async def find_specific_provider(self, name: str) -> Provider:
        provider = self.get_provider(name)
        if provider is None:
            raise ProviderNotFoundError(
                f"Provider '{name}' not found. Available: {', '.join(self.public_names())}"
            )

        status = await provider.get_status()
        if not status.is_ready:
            message = f"Provider '{name}' is {status.state.value}"
            if status.message:
                message += f": {status.message}"
            raise _unavailable(message, status)

        return provider

    def build_context(self, user_context: str = "") -> str:
        system_info = self.context_source().describe()
        if user_context:
            return f"{user_context}. System Info: {system_info}"
        return f"System Info: {system_info}"

    async def generate_command(
        self,
        query: str,
        user_context: str = "",
        provider_name: Optional[str] = None,
    ) -> str:
        """Resolve a provider and return the command it generates.

        An explicit ``provider_name`` wins over the stored preference, which
        wins over auto-detection. The command is returned, never executed.
        """
        if provider_name:
            provider = await self.find_specific_provider(provider_name)
        else:
            provider = await self.find_available_provider()

        logger.debug("Generating with %s", provider.name)
        return await provider.generate_command(query, self.build_context(user_context))

    async def list_providers(self) -> List[Tuple[Provider, ProviderStatus]]:
        """Status of every user-facing provider, in declared order."""
        results = []
        for provider in self.providers:
            if provider.internal:
                continue
            results.append((provider, await provider.get_status()))
        return results

    def set_provider(self, name: str) -> Optional[str]:
        """Persist ``name`` as the sticky provider; "auto" clears it."""
        if name == AUTO:
            self.config_store.set_provider(None)
            return None

        if self.get_provider(name) is None:
            available = ", ".join(self.public_names() + [AUTO])
            raise ProviderNotFoundError(
                f"Invalid provider '{name}'. Available: {available}"
            )

        self.config_store.set_provider(name)
        return name
