"""Binary asset duplication (component thumbnails)."""

from __future__ import annotations

import shutil
from pathlib import Path

from ..utils import ensure_dir
from .errors import FileAlreadyExistsError, SourceAssetMissingError


def copy_asset(source: str | Path, dest: str | Path, *, overwrite: bool = False) -> Path:
    """Copy *source* to *dest*, creating the destination directory tree.

    Args:
        source: Existing template asset.
        dest: Target file path.
        overwrite: Replace *dest* if it already exists.

    Returns:
        The destination path.

    Raises:
        SourceAssetMissingError: If *source* is not a file.
        FileAlreadyExistsError: If *dest* exists and *overwrite* is off.
    """
    src = Path(source)
    target = Path(dest)
    if not src.is_file():
        raise SourceAssetMissingError(src)

    ensure_dir(target.parent)
    if target.exists() and not overwrite:
        raise FileAlreadyExistsError(target)

    shutil.copy2(src, target)
    return target
