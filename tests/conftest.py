"""Test configuration for pytest."""

import os
import shutil
import tempfile
from pathlib import Path

import pytest

from gencli.cache import CommandCache
from gencli.config import ConfigStore, GenSettings
from gencli.exceptions import CommandNotFoundError
from gencli.providers import ProviderState, ProviderStatus
from gencli.ui import configure_output


class FakeRunner:
    """Process runner that answers from a table of argv prefixes."""

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    def run(self, args, timeout, input_text=None):
        args = tuple(args)
        self.calls.append((args, timeout, input_text))
        for prefix, response in self.responses.items():
            if args[: len(prefix)] == prefix:
                if isinstance(response, Exception):
                    raise response
                return response
        raise CommandNotFoundError(args[0])

    def calls_to(self, *prefix):
        return [c for c in self.calls if c[0][: len(prefix)] == prefix]


class StubProvider:
    """Provider double with a fixed status."""

    def __init__(self, name, state=ProviderState.READY, internal=False, message=None):
        self.name = name
        self.internal = internal
        self.state = state
        self.message = message
        self.status_calls = 0
        self.requests = []

    async def get_status(self):
        self.status_calls += 1
        return ProviderStatus(self.state, self.name, self.message)

    async def generate_command(self, query, context=""):
        self.requests.append((query, context))
        return f"echo {self.name}"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path)


@pytest.fixture
def make_runner():
    return FakeRunner


@pytest.fixture
def make_stub():
    return StubProvider


@pytest.fixture
def cache(temp_dir):
    return CommandCache(temp_dir / "cache.json")


@pytest.fixture
def config_store(temp_dir):
    return ConfigStore(temp_dir / "config.json")


@pytest.fixture
def sample_settings(temp_dir):
    return GenSettings(config_dir=temp_dir / "gencli")


@pytest.fixture(autouse=True)
def setup_test_environment(temp_dir, monkeypatch):
    """Keep every test away from the real ~/.gencli."""
    for key in list(os.environ):
        if key.startswith("GENCLI_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("GENCLI_CONFIG_DIR", str(temp_dir / "gencli"))
    yield
    configure_output(True)
