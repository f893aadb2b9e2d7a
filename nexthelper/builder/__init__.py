"""nexthelper builder module.

Runs the production build of the site and starts its servers.

Key pieces:
    BuildRunner      - build -> copy export -> launch servers
    run_build        - blocking command with inherited output
    copy_tree        - overwriting directory mirror
    launch_detached  - fire-and-forget process launch
"""

from .runner import (
    BuildResult,
    BuildRunner,
    copy_tree,
    launch_detached,
    resolve_executable,
    run_build,
)

__all__ = [
    "BuildRunner",
    "BuildResult",
    "copy_tree",
    "launch_detached",
    "resolve_executable",
    "run_build",
]
