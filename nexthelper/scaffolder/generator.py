"""Component scaffolding orchestrator.

Takes a user-supplied component name and, in order:

1. normalises it into ``Capitalized`` and ``lowercase`` forms,
2. renders the component template to ``<components-dir>/<Capitalized>.<ext>``,
3. patches each registry file (imports, slug routing, side-square list),
4. duplicates the template thumbnail as ``<thumbnails-dir>/<lowercase> thumbnail.jpg``.

Each step fails fast.  Nothing is rolled back: a failure while patching the
second registry file leaves the component file and the first registry file in
place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..config import Config, RegistryPatch
from ..utils import print_step
from .assets import copy_asset
from .names import ComponentName, normalize_name
from .patcher import Patch, patch_file
from .templates import COMPONENT_TEMPLATE, TemplateRenderer


@dataclass
class ScaffoldResult:
    """What a successful scaffolding run produced."""

    name: ComponentName
    component_path: Path
    registry_changes: dict[Path, bool] = field(default_factory=dict)
    thumbnail_path: Path | None = None

    @property
    def patched_files(self) -> list[Path]:
        """Registry files whose content actually changed."""
        return [path for path, changed in self.registry_changes.items() if changed]

    def summary(self) -> dict[str, str]:
        """Return a label -> value mapping for console tables."""
        data = {
            "Component": str(self.component_path),
            "Thumbnail": str(self.thumbnail_path) if self.thumbnail_path else "-",
        }
        for path, changed in self.registry_changes.items():
            data[path.name] = "patched" if changed else "already registered"
        return data


class ComponentScaffolder:
    """Creates a component and registers it across the site's source files."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self.renderer = TemplateRenderer()
        if config.scaffold.component_template is not None:
            self.component_renderer, self.component_template = TemplateRenderer.for_template_file(
                config.resolve(config.scaffold.component_template)
            )
        else:
            self.component_renderer, self.component_template = self.renderer, COMPONENT_TEMPLATE

    # -- Public API --------------------------------------------------------

    def create(self, raw_name: str) -> ScaffoldResult:
        """Scaffold and register the component called *raw_name*.

        Raises:
            EmptyNameError: Before touching the filesystem, for blank input.
            FileAlreadyExistsError: If the component file or the thumbnail
                exists and overwriting is disabled.
            MarkerNotFoundError: If a registry file lacks one of its markers.
            SourceAssetMissingError: If the thumbnail template is missing.
            OSError: Any other filesystem failure, unchanged.
        """
        name = normalize_name(raw_name)
        context = name.as_context()

        component_path = self.write_component(name)
        print_step(f"Created {component_path}")
        result = ScaffoldResult(name=name, component_path=component_path)

        for path, patches in self._registry_patches_by_file().items():
            changed = patch_file(path, [self._render_patch(p, context) for p in patches])
            result.registry_changes[path] = changed
            print_step(f"{'Patched' if changed else 'Already registered in'} {path}")

        result.thumbnail_path = self.copy_thumbnail(name)
        print_step(f"Created {result.thumbnail_path}")
        return result

    def component_path_for(self, name: ComponentName) -> Path:
        ext = self.config.scaffold.component_extension.lstrip(".")
        return self.config.components_path / f"{name.capitalized}.{ext}"

    def thumbnail_path_for(self, name: ComponentName) -> Path:
        filename = self.renderer.render_string(self.config.scaffold.thumbnail_name, name.as_context())
        return self.config.thumbnails_path / filename

    def write_component(self, name: ComponentName) -> Path:
        """Render the component template for *name* into the components dir."""
        return self.component_renderer.render_to_file(
            self.component_template,
            self.component_path_for(name),
            name.as_context(),
            overwrite=self.config.scaffold.overwrite,
        )

    def copy_thumbnail(self, name: ComponentName) -> Path:
        """Duplicate the template thumbnail for *name*."""
        return copy_asset(
            self.config.thumbnail_template_path,
            self.thumbnail_path_for(name),
            overwrite=self.config.scaffold.overwrite,
        )

    # -- Internals ---------------------------------------------------------

    def _registry_patches_by_file(self) -> dict[Path, list[RegistryPatch]]:
        """Group configured patches by target file, keeping declaration order."""
        grouped: dict[Path, list[RegistryPatch]] = {}
        for patch in self.config.scaffold.registry_patches:
            grouped.setdefault(self.config.resolve(patch.path), []).append(patch)
        return grouped

    def _render_patch(self, patch: RegistryPatch, context: dict[str, str]) -> Patch:
        return Patch(
            marker=patch.marker,
            probe=self.renderer.render_string(patch.probe, context),
            insert=self.renderer.render_string(patch.insert, context),
        )
