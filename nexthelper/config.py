"""nexthelper configuration.

Typed configuration for the scaffolder and the build runner. All settings use
Pydantic v2 models so they can be validated at construction time and serialised
to/from JSON or environment variables. Relative paths are resolved against
``Config.project_root`` through the derived-path properties.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field


class RegistryPatch(BaseModel):
    """One marker-anchored insertion into a registry source file.

    ``probe`` and ``insert`` are Jinja2 strings rendered with ``name`` (the
    capitalized component name) and ``slug`` (the lower-cased name).
    """

    path: Path = Field(..., description="Registry file, relative to the project root")
    marker: str = Field(..., min_length=1, description="Literal marker the insert is placed before")
    probe: str = Field(..., min_length=1, description="Fragment whose presence means already patched")
    insert: str = Field(..., min_length=1, description="Fragment inserted directly before the marker")


_IMPORT_LINE = "import {{ name }} from './illusions/{{ name }}';"
_SLUG_CONDITION = 'if(props.slug?.toLowerCase() == "{{ slug }}")'

DEFAULT_REGISTRY_PATCHES: list[dict[str, str]] = [
    {
        "path": "src/app/_components/CentralSquare.tsx",
        "marker": "// End of Imports",
        "probe": _IMPORT_LINE,
        "insert": _IMPORT_LINE + "\n",
    },
    {
        "path": "src/app/_components/CentralSquare.tsx",
        "marker": "// End of content section",
        "probe": _SLUG_CONDITION,
        "insert": _SLUG_CONDITION + " \n    content = <{{ name }} />\n  ",
    },
    {
        "path": "src/app/_components/SquareView.tsx",
        "marker": "// End of Imports",
        "probe": _IMPORT_LINE,
        "insert": _IMPORT_LINE + "\n",
    },
    {
        "path": "src/app/_components/SquareView.tsx",
        "marker": "{/*  End of side squares */}",
        "probe": '<SideSquare link="/{{ slug }}"',
        "insert": (
            '<SideSquare link="/{{ slug }}" title="{{ name }}" '
            'imageName="thumbnails/{{ slug }} thumbnail.jpg"/>\n        '
        ),
    },
    {
        "path": "src/app/[square]/page.tsx",
        "marker": "// End of illusion slugs",
        "probe": "'{{ slug }}',",
        "insert": "'{{ slug }}', \n    ",
    },
]


class ScaffoldConfig(BaseModel):
    """Layout consumed and produced by the component scaffolder."""

    components_dir: Path = Field(default=Path("src/app/_components/illusions"))
    component_extension: str = Field(default="tsx", min_length=1)
    component_template: Optional[Path] = Field(
        default=None,
        description="Custom Jinja2 component template; the packaged one is used when unset",
    )
    thumbnails_dir: Path = Field(default=Path("public/thumbnails"))
    thumbnail_template: Path = Field(default=Path("public/thumbnails/template thumbnail.jpg"))
    thumbnail_name: str = Field(default="{{ slug }} thumbnail.jpg")
    overwrite: bool = Field(
        default=False,
        description="Replace an existing component file or thumbnail instead of failing",
    )
    registry_patches: list[RegistryPatch] = Field(
        default_factory=lambda: [RegistryPatch(**p) for p in DEFAULT_REGISTRY_PATCHES]
    )


class BuildConfig(BaseModel):
    """Commands and folders used by the production build runner."""

    npm: str = Field(default="npm", description="npm executable, resolved on PATH at startup")
    build_args: list[str] = Field(default=["run", "build"])
    output_dir: Path = Field(default=Path("out"))
    deploy_dir: Path = Field(default=Path("../prod-space"))
    serve_args: list[str] = Field(default=["exec", "http-server"])
    dev_args: list[str] = Field(default=["run", "dev"])
    build_timeout: Optional[float] = Field(
        default=None, gt=0, description="Seconds before the build is killed; None waits forever"
    )


class Config(BaseModel):
    """Global nexthelper configuration.

    Created once by the CLI entry point (from a JSON file or the environment)
    and passed to ``ComponentScaffolder`` and ``BuildRunner``.
    """

    project_root: Path = Field(default=Path("."))
    scaffold: ScaffoldConfig = Field(default_factory=ScaffoldConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    def resolve(self, path: Path) -> Path:
        """Resolve *path* against the project root unless it is absolute."""
        return path if path.is_absolute() else self.project_root / path

    @property
    def components_path(self) -> Path:
        return self.resolve(self.scaffold.components_dir)

    @property
    def thumbnails_path(self) -> Path:
        return self.resolve(self.scaffold.thumbnails_dir)

    @property
    def thumbnail_template_path(self) -> Path:
        return self.resolve(self.scaffold.thumbnail_template)

    @property
    def build_output_path(self) -> Path:
        """Directory the front-end build writes its static export to."""
        return self.resolve(self.build.output_dir)

    @property
    def deploy_path(self) -> Path:
        """Deployment folder the static export is mirrored into."""
        return self.resolve(self.build.deploy_dir)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON.

        Args:
            path: The JSON file to read.

        Returns:
            A validated ``Config`` instance.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            NEXTHELPER_PROJECT_ROOT, NEXTHELPER_COMPONENTS_DIR,
            NEXTHELPER_THUMBNAILS_DIR, NEXTHELPER_OVERWRITE,
            NEXTHELPER_NPM, NEXTHELPER_OUTPUT_DIR, NEXTHELPER_DEPLOY_DIR.
        """
        scaffold_kwargs: dict[str, Any] = {}
        if os.environ.get("NEXTHELPER_COMPONENTS_DIR"):
            scaffold_kwargs["components_dir"] = Path(os.environ["NEXTHELPER_COMPONENTS_DIR"])
        if os.environ.get("NEXTHELPER_THUMBNAILS_DIR"):
            scaffold_kwargs["thumbnails_dir"] = Path(os.environ["NEXTHELPER_THUMBNAILS_DIR"])
        if os.environ.get("NEXTHELPER_OVERWRITE"):
            scaffold_kwargs["overwrite"] = os.environ["NEXTHELPER_OVERWRITE"].strip().lower() in (
                "1",
                "true",
                "yes",
                "on",
            )

        build_kwargs: dict[str, Any] = {}
        if os.environ.get("NEXTHELPER_NPM"):
            build_kwargs["npm"] = os.environ["NEXTHELPER_NPM"]
        if os.environ.get("NEXTHELPER_OUTPUT_DIR"):
            build_kwargs["output_dir"] = Path(os.environ["NEXTHELPER_OUTPUT_DIR"])
        if os.environ.get("NEXTHELPER_DEPLOY_DIR"):
            build_kwargs["deploy_dir"] = Path(os.environ["NEXTHELPER_DEPLOY_DIR"])

        return cls(
            project_root=Path(os.environ.get("NEXTHELPER_PROJECT_ROOT", ".")),
            scaffold=ScaffoldConfig(**scaffold_kwargs),
            build=BuildConfig(**build_kwargs),
        )
