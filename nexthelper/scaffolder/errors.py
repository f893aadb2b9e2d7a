"""Exceptions raised by the component scaffolder."""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every scaffolding failure."""


class EmptyNameError(ScaffoldError, ValueError):
    """Raised when the component name is empty after trimming."""

    def __init__(self) -> None:
        super().__init__("Please enter a component name.")


class MarkerNotFoundError(ScaffoldError):
    """Raised when a registry file lacks the marker a patch is anchored to."""

    def __init__(self, marker: str, path: Path | None = None) -> None:
        self.marker = marker
        self.path = path
        where = f" in {path}" if path is not None else ""
        super().__init__(f"Marker '{marker}' not found{where}")


class FileAlreadyExistsError(ScaffoldError, FileExistsError):
    """Raised when a scaffolded file would replace an existing one."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"File already exists: {path}")


class SourceAssetMissingError(ScaffoldError, FileNotFoundError):
    """Raised when the thumbnail template to duplicate does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Source asset not found: {path}")
