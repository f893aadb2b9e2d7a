"""Marker-anchored, idempotent patching of registry source files.

Each registry file carries literal marker comments (``// End of Imports`` and
friends).  A patch inserts a rendered fragment directly before its marker,
unless a probe fragment shows the insertion was already made.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..utils import read_source, write_source
from .errors import MarkerNotFoundError


@dataclass(frozen=True)
class Patch:
    """A rendered marker/probe/insert triple ready to apply."""

    marker: str
    probe: str
    insert: str


def apply_patch(content: str, marker: str, probe: str, insert: str) -> str:
    """Insert *insert* before the first *marker* unless *probe* is present.

    Args:
        content: Full current file content.
        marker: Literal marker expected exactly once in *content*.
        probe: Fragment whose presence means the patch was already applied.
        insert: Fragment placed directly before the marker.

    Returns:
        The patched content, or *content* itself when already patched.

    Raises:
        MarkerNotFoundError: If *marker* does not occur in *content*.
    """
    if marker not in content:
        raise MarkerNotFoundError(marker)
    if probe in content:
        return content
    return content.replace(marker, insert + marker, 1)


def patch_file(path: str | Path, patches: list[Patch]) -> bool:
    """Apply *patches* in order to one file and write it back if changed.

    The file is written at most once, and only after every patch succeeded,
    so a missing marker leaves it untouched.

    Returns:
        ``True`` if the file content changed.
    """
    file_path = Path(path)
    original = read_source(file_path)
    content = original
    for patch in patches:
        try:
            content = apply_patch(content, patch.marker, patch.probe, patch.insert)
        except MarkerNotFoundError as exc:
            raise MarkerNotFoundError(exc.marker, file_path) from None

    if content == original:
        return False
    write_source(file_path, content)
    return True
