"""Generic provider wrapping one externally installed AI CLI tool."""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..cache import CommandCache
from ..exceptions import OutdatedError, ProcessFailureError, ProviderError
from ..extraction import ExtractionPolicy, extract_command
from ..process import ProcessRunner
from ..versions import compare_versions

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "auto"


class ProviderState(str, Enum):
    """Readiness of a provider, computed on every status check."""

    NOT_INSTALLED = "not_installed"
    NOT_AUTHENTICATED = "not_authenticated"
    READY = "ready"
    ERROR = "error"


@dataclass
class ProviderStatus:
    state: ProviderState
    provider: str
    message: Optional[str] = None

    @property
    def is_ready(self) -> bool:
        return self.state == ProviderState.READY

    def describe(self) -> str:
        if self.state == ProviderState.ERROR and self.message:
            return f"{self.state.value} ({self.message})"
        return self.state.value


@dataclass(frozen=True)
class ProviderSpec:
    """Declarative description of how to drive one AI CLI tool.

    ``invoke_command`` is an argv template; each element is formatted with
    ``prompt`` and ``model``.
    """

    name: str
    display_name: str
    detect_command: Tuple[str, ...]
    invoke_command: Tuple[str, ...]
    system_prompt: str
    extraction: ExtractionPolicy = ExtractionPolicy.PERMISSIVE
    version_pattern: Optional[str] = None
    min_version: Optional[str] = None
    auth_command: Optional[Tuple[str, ...]] = None
    auth_marker: Optional[str] = None
    invoke_input: Optional[str] = None
    model: Optional[str] = None
    internal: bool = False
    detect_timeout: float = 5
    auth_timeout: float = 5
    timeout: float = 10


class Provider:
    """One AI CLI tool, driven according to its ProviderSpec."""

    def __init__(
        self,
        spec: ProviderSpec,
        runner: Optional[ProcessRunner] = None,
        cache: Optional[CommandCache] = None,
        timeout: Optional[float] = None,
    ):
        self.spec = spec
        self.runner = runner or ProcessRunner()
        self.cache = cache if cache is not None else CommandCache()
        self.timeout = timeout if timeout is not None else spec.timeout

    def __repr__(self):
        return f"Provider(name='{self.name}', model='{self.model}')"

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def model(self) -> Optional[str]:
        return self.spec.model

    @property
    def min_version(self) -> Optional[str]:
        return self.spec.min_version

    @property
    def internal(self) -> bool:
        return self.spec.internal

    async def is_installed(self) -> bool:
        """Check that the tool is on PATH and meets the minimum version.

        Returns False when the tool is missing. Raises OutdatedError when the
        reported version is below ``min_version`` and ProviderError when the
        version cannot be read.
        """
        spec = self.spec
        try:
            output = self.runner.run(spec.detect_command, timeout=spec.detect_timeout)
        except ProcessFailureError as e:
            if spec.version_pattern is None:
                return False
            if e.returncode == 127 or "command not found" in str(e):
                return False
            raise

        if spec.version_pattern is None:
            return True

        match = re.search(spec.version_pattern, output)
        if not match:
            raise ProviderError(
                f"{spec.display_name} found but version could not be determined"
            )

        version = match.group(1)
        if spec.min_version and compare_versions(version, spec.min_version) < 0:
            raise OutdatedError(self.name, version, spec.min_version)

        logger.debug("%s version %s detected", self.name, version)
        return True

    async def is_authenticated(self) -> bool:
        spec = self.spec
        if spec.auth_command is None:
            # Tools without an auth probe handle login themselves
            return True

        try:
            output = self.runner.run(spec.auth_command, timeout=spec.auth_timeout)
        except ProcessFailureError as e:
            logger.debug("%s auth probe failed: %s", self.name, e)
            return False
        return bool(spec.auth_marker) and spec.auth_marker in output

    async def get_status(self) -> ProviderStatus:
        """Probe installation then authentication. Never raises."""
        try:
            if not await self.is_installed():
                return ProviderStatus(ProviderState.NOT_INSTALLED, self.name)
            if not await self.is_authenticated():
                return ProviderStatus(ProviderState.NOT_AUTHENTICATED, self.name)
            return ProviderStatus(ProviderState.READY, self.name)
        except Exception as e:
            return ProviderStatus(ProviderState.ERROR, self.name, str(e))

    def cache_key(self, query: str, context: str = "") -> str:
        return f"{self.name}:{self.model or DEFAULT_MODEL}:{query}:{context}"

    async def generate_command(self, query: str, context: str = "") -> str:
        """Generate a command for ``query``, reusing a cached answer if any."""
        key = self.cache_key(query, context)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for %s", self.name)
            return cached

        command = await self._generate_command(query, context)
        self.cache.store(key, command)
        return command

    def build_prompt(self, query: str, context: str = "") -> str:
        if context:
            return f"{self.spec.system_prompt} Context: {context}. User query: {query}"
        return f"{self.spec.system_prompt} User query: {query}"

    def build_invocation(self, prompt: str) -> list:
        values = {"prompt": prompt, "model": self.model or DEFAULT_MODEL}
        return [part.format(**values) for part in self.spec.invoke_command]

    async def _generate_command(self, query: str, context: str) -> str:
        prompt = self.build_prompt(query, context)
        args = self.build_invocation(prompt)

        try:
            output = self.runner.run(
                args, timeout=self.timeout, input_text=self.spec.invoke_input
            )
        except ProcessFailureError as e:
            raise ProcessFailureError(
                f"{self.spec.display_name} failed: {e}",
                returncode=e.returncode,
                provider=self.name,
            ) from e

        return extract_command(output, self.spec.extraction, tool=self.spec.display_name)

    def clear_cache(self) -> int:
        """Forget every cached command produced by this provider."""
        return self.cache.clear(prefix=f"{self.name}:")
