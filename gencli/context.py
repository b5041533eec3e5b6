"""System context snapshot used to ground prompts."""

import json
import os
import platform
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Tuple

EXCLUDED_ENTRIES = {"node_modules"}


@dataclass(frozen=True)
class OSInfo:
    platform: str
    release: str
    type: str
    arch: str


@dataclass(frozen=True)
class DirectoryEntry:
    name: str
    type: str  # 'file' or 'directory'


@dataclass(frozen=True)
class SystemContext:
    """Immutable description of where the user is working."""

    os: OSInfo
    shell: str
    cwd: str
    entries: Tuple[DirectoryEntry, ...] = field(default_factory=tuple)

    def describe(self) -> str:
        """Render the snapshot as a single line for the prompt."""
        names = json.dumps([entry.name for entry in self.entries])
        return (
            f"OS: {self.os.platform} {self.os.release}, Shell: {self.shell}, "
            f"CWD: {self.cwd}, Files: {names}"
        )


def get_os_info() -> OSInfo:
    return OSInfo(
        platform=sys.platform,
        release=platform.release(),
        type=platform.system(),
        arch=platform.machine(),
    )


def get_shell(environ: Optional[Mapping[str, str]] = None) -> str:
    environ = os.environ if environ is None else environ
    shell = environ.get("SHELL")
    if shell:
        return shell
    if sys.platform == "win32":
        return environ.get("COMSPEC", "cmd.exe")
    return "/bin/sh"


def list_directory(path: Path) -> Tuple[DirectoryEntry, ...]:
    """List visible top-level entries, skipping dotfiles and node_modules."""
    try:
        children = sorted(Path(path).iterdir(), key=lambda p: p.name)
    except OSError:
        return ()

    entries = []
    for child in children:
        if child.name.startswith(".") or child.name in EXCLUDED_ENTRIES:
            continue
        entry_type = "directory" if child.is_dir() else "file"
        entries.append(DirectoryEntry(child.name, entry_type))
    return tuple(entries)


def gather_system_context(
    cwd: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> SystemContext:
    """Capture OS, shell, working directory and its listing."""
    cwd = Path(cwd) if cwd is not None else Path.cwd()
    return SystemContext(
        os=get_os_info(),
        shell=get_shell(environ),
        cwd=str(cwd),
        entries=list_directory(cwd),
    )
