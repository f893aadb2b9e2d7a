"""Command-line entry point.

Usage::

    nexthelper component                 # interactive: one name per prompt, 'done' to quit
    nexthelper component spinner myBox   # scaffold the given names
    nexthelper build                     # build, deploy, start http-server + dev server
    nexthelper build --no-serve          # build and deploy only
    python -m nexthelper --config nexthelper.json build
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.prompt import Prompt

from .builder import BuildRunner
from .config import Config
from .scaffolder import ComponentScaffolder, EmptyNameError, ScaffoldError
from .utils import console, print_error, print_success, print_summary_table, print_warning

DONE_WORDS = ("done", "quit", "exit")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def scaffold_one(scaffolder: ComponentScaffolder, raw_name: str) -> bool:
    """Scaffold one component and report the outcome inline.

    Returns:
        ``True`` on success.
    """
    try:
        result = scaffolder.create(raw_name)
    except EmptyNameError as exc:
        print_warning(str(exc))
        return False
    except (ScaffoldError, OSError) as exc:
        print_error(f"Error: {exc}")
        return False

    print_success(
        f"Component '{result.component_path.name}' created successfully "
        "and all related files updated."
    )
    print_summary_table(result.summary(), title=result.name.capitalized)
    return True


def run_component(config: Config, names: list[str]) -> int:
    """Scaffold *names*, or prompt for names until 'done' when none are given."""
    scaffolder = ComponentScaffolder(config)

    if names:
        results = [scaffold_one(scaffolder, name) for name in names]
        return 0 if all(results) else 1

    while True:
        try:
            raw = Prompt.ask(
                "Enter component name ([dim]'done' to finish[/dim])",
                default="",
                show_default=False,
                console=console,
            )
        except (EOFError, KeyboardInterrupt):
            console.print()
            break
        if raw.strip().lower() in DONE_WORDS:
            break
        scaffold_one(scaffolder, raw)
    return 0


def run_build_command(config: Config, serve: bool = True) -> int:
    """Run the production build and return a process exit status."""
    result = asyncio.run(BuildRunner(config).run(serve=serve))
    print_summary_table(result.summary(), title="Production build")
    if result.processes:
        console.print("[dim]Servers keep running after this command returns.[/dim]")
    return 0 if result.success else 1


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nexthelper",
        description="Scaffold square components and run production builds",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  nexthelper component spinner\n"
            "  nexthelper --project-root ~/site build --no-serve\n"
        ),
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="JSON configuration file (default: read NEXTHELPER_* environment variables)",
    )
    parser.add_argument(
        "--project-root", "-p",
        default=None,
        help="Site root directory (overrides the configured project_root)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    component = sub.add_parser("component", help="Create and register components")
    component.add_argument(
        "names",
        nargs="*",
        help="Component names; prompts interactively when omitted",
    )

    build = sub.add_parser("build", help="Build, deploy and start the servers")
    build.add_argument(
        "--no-serve",
        action="store_true",
        help="Stop after copying the build output",
    )
    return parser


def load_config(config_path: Optional[str], project_root: Optional[str]) -> Config:
    config = Config.load(Path(config_path)) if config_path else Config.from_env()
    if project_root:
        config.project_root = Path(project_root)
    return config


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point for ``nexthelper`` and ``python -m nexthelper``."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config, args.project_root)
    except (OSError, ValidationError) as exc:
        print_error(f"Error: Could not load configuration: {exc}")
        sys.exit(2)

    if args.command == "component":
        sys.exit(run_component(config, args.names))
    sys.exit(run_build_command(config, serve=not args.no_serve))


if __name__ == "__main__":
    main()
