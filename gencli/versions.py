"""Dotted version string comparison."""

from typing import List


def _parse(version: str) -> List[int]:
    parts = []
    for part in version.strip().split("."):
        if not part.isdigit():
            raise ValueError(f"Invalid version component {part!r} in {version!r}")
        parts.append(int(part))
    return parts


def compare_versions(a: str, b: str) -> int:
    """Compare two dot-separated versions.

    Returns -1 if ``a`` is lower than ``b``, 1 if higher and 0 if equal.
    Missing trailing components count as zero, so "1.0" equals "1.0.0".
    """
    a_parts = _parse(a)
    b_parts = _parse(b)
    length = max(len(a_parts), len(b_parts))
    a_parts += [0] * (length - len(a_parts))
    b_parts += [0] * (length - len(b_parts))

    for a_part, b_part in zip(a_parts, b_parts):
        if a_part > b_part:
            return 1
        if a_part < b_part:
            return -1
    return 0
