"""nexthelper scaffolder -- creates and registers square components.

Quick usage::

    from nexthelper.config import Config
    from nexthelper.scaffolder import ComponentScaffolder

    scaffolder = ComponentScaffolder(Config(project_root=Path("~/site")))
    result = scaffolder.create("bouncyBallroom")
"""

from .errors import (
    EmptyNameError,
    FileAlreadyExistsError,
    MarkerNotFoundError,
    ScaffoldError,
    SourceAssetMissingError,
)
from .generator import ComponentScaffolder, ScaffoldResult
from .names import ComponentName, capitalize_first, normalize_name
from .patcher import Patch, apply_patch, patch_file
from .templates import TemplateRenderer

__all__ = [
    # Orchestration
    "ComponentScaffolder",
    "ScaffoldResult",
    # Names
    "ComponentName",
    "capitalize_first",
    "normalize_name",
    # Patching
    "Patch",
    "apply_patch",
    "patch_file",
    # Templates
    "TemplateRenderer",
    # Errors
    "ScaffoldError",
    "EmptyNameError",
    "MarkerNotFoundError",
    "FileAlreadyExistsError",
    "SourceAssetMissingError",
]
