"""Exceptions raised by gencli providers and the orchestrator.

Exception Hierarchy:
    GenCLIError (base)
    ├── ProviderError - provider probe problems (e.g. unreadable version)
    │   └── OutdatedError - installed tool is below the minimum version
    ├── ProviderUnavailableError - selected provider is not ready
    │   ├── NotInstalledError
    │   └── NotAuthenticatedError
    ├── ExtractionFailedError - no command could be recovered from output
    ├── ProcessFailureError - external tool failed or timed out
    │   └── CommandNotFoundError - executable is not on PATH
    ├── ProviderNotFoundError - no provider registered under a name
    └── NoProviderAvailableError - auto-detect found nothing ready
"""

from typing import Optional


class GenCLIError(Exception):
    """Base exception for all gencli errors."""

    pass


class ProviderError(GenCLIError):
    """Raised when a provider probe fails in an unexpected way."""

    pass


class OutdatedError(ProviderError):
    """Raised when an installed tool reports a version below the floor."""

    def __init__(self, provider: str, version: str, min_version: str):
        self.provider = provider
        self.version = version
        self.min_version = min_version
        super().__init__(f"Version {version} is less than required {min_version}")


class ProviderUnavailableError(GenCLIError):
    """Raised when a provider was found but is not ready."""

    pass


class NotInstalledError(ProviderUnavailableError):
    pass


class NotAuthenticatedError(ProviderUnavailableError):
    pass


class ExtractionFailedError(GenCLIError):
    """Raised when no extraction strategy produced a command."""

    pass


class ProcessFailureError(GenCLIError):
    """Raised when an external command exits non-zero or times out.

    ``returncode`` is None for timeouts.
    """

    def __init__(
        self,
        message: str,
        returncode: Optional[int] = None,
        provider: Optional[str] = None,
    ):
        self.returncode = returncode
        self.provider = provider
        super().__init__(message)


class CommandNotFoundError(ProcessFailureError):
    """Raised when the executable itself cannot be found."""

    def __init__(self, executable: str):
        self.executable = executable
        super().__init__(f"{executable}: command not found", returncode=127)


class ProviderNotFoundError(GenCLIError):
    """Raised when no provider is registered under the requested name."""

    pass


class NoProviderAvailableError(GenCLIError):
    """Raised when auto-detection finds no ready provider."""

    pass
