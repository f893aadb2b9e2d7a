"""Tests for the component scaffolding orchestrator.

Covers:
- Component file creation and placeholder substitution
- Registry patching of the three default files
- Thumbnail duplication
- Re-runs and already-registered components
- Fail-fast behaviour without rollback
- Custom templates and layouts
"""

from __future__ import annotations

from pathlib import Path

import pytest

from nexthelper.config import Config, RegistryPatch, ScaffoldConfig
from nexthelper.scaffolder import (
    ComponentScaffolder,
    EmptyNameError,
    FileAlreadyExistsError,
    MarkerNotFoundError,
    SourceAssetMissingError,
)

pytestmark = pytest.mark.unit


def _snapshot(root: Path) -> dict[str, bytes]:
    return {str(p.relative_to(root)): p.read_bytes() for p in sorted(root.rglob("*")) if p.is_file()}


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------


class TestCreate:
    def test_component_file(self, site_config: Config, site_root: Path):
        result = ComponentScaffolder(site_config).create("box")
        expected = site_root / "src" / "app" / "_components" / "illusions" / "Box.tsx"
        assert result.component_path == expected
        content = expected.read_text(encoding="utf-8")
        assert "export default function Box()" in content
        assert "{{" not in content

    def test_names(self, site_config: Config):
        result = ComponentScaffolder(site_config).create("  myBox ")
        assert result.name.capitalized == "MyBox"
        assert result.name.lower == "mybox"
        assert result.component_path.name == "MyBox.tsx"

    def test_central_square_patched(self, site_config: Config, registry_paths: dict[str, Path]):
        ComponentScaffolder(site_config).create("box")
        content = registry_paths["central"].read_text(encoding="utf-8")
        assert "import Box from './illusions/Box';\n// End of Imports" in content
        assert (
            'if(props.slug?.toLowerCase() == "box") \n'
            "    content = <Box />\n"
            "  // End of content section"
        ) in content

    def test_square_view_patched(self, site_config: Config, registry_paths: dict[str, Path]):
        ComponentScaffolder(site_config).create("box")
        content = registry_paths["view"].read_text(encoding="utf-8")
        assert "import Box from './illusions/Box';\n// End of Imports" in content
        assert (
            '<SideSquare link="/box" title="Box" imageName="thumbnails/box thumbnail.jpg"/>\n'
            "        {/*  End of side squares */}"
        ) in content

    def test_page_patched(self, site_config: Config, registry_paths: dict[str, Path]):
        ComponentScaffolder(site_config).create("box")
        content = registry_paths["page"].read_text(encoding="utf-8")
        assert "'box', \n    // End of illusion slugs" in content

    def test_thumbnail_copied(self, site_config: Config, site_root: Path):
        result = ComponentScaffolder(site_config).create("myBox")
        thumbnails = site_root / "public" / "thumbnails"
        assert result.thumbnail_path == thumbnails / "mybox thumbnail.jpg"
        assert result.thumbnail_path.read_bytes() == (thumbnails / "template thumbnail.jpg").read_bytes()

    def test_registry_changes_reported_per_file(self, site_config: Config, registry_paths: dict[str, Path]):
        result = ComponentScaffolder(site_config).create("box")
        assert set(result.registry_changes) == set(registry_paths.values())
        assert all(result.registry_changes.values())
        assert len(result.patched_files) == 3

    def test_summary(self, site_config: Config):
        summary = ComponentScaffolder(site_config).create("box").summary()
        assert summary["Component"].endswith("Box.tsx")
        assert summary["CentralSquare.tsx"] == "patched"
        assert summary["page.tsx"] == "patched"

    def test_special_characters_kept_literal(
        self, site_config: Config, site_root: Path, registry_paths: dict[str, Path]
    ):
        result = ComponentScaffolder(site_config).create("tom's&Jerry")

        assert result.thumbnail_path == site_root / "public" / "thumbnails" / "tom's&jerry thumbnail.jpg"
        assert result.thumbnail_path.exists()
        page = registry_paths["page"].read_text(encoding="utf-8")
        assert "'tom's&jerry', \n    // End of illusion slugs" in page
        assert "&#39;" not in page
        central = registry_paths["central"].read_text(encoding="utf-8")
        assert "import Tom's&Jerry from './illusions/Tom's&Jerry';" in central
        assert 'if(props.slug?.toLowerCase() == "tom\'s&jerry")' in central
        assert "&amp;" not in central
        assert "export default function Tom's&Jerry()" in result.component_path.read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Idempotence
# ---------------------------------------------------------------------------


class TestAlreadyRegistered:
    def test_registry_with_probe_left_byte_for_byte(
        self, site_config: Config, registry_paths: dict[str, Path]
    ):
        page = registry_paths["page"]
        page.write_bytes(page.read_bytes().replace(b"'tarzan',", b"'tarzan',\n    'box',"))
        before = page.read_bytes()

        result = ComponentScaffolder(site_config).create("box")

        assert page.read_bytes() == before
        assert result.registry_changes[page] is False

    def test_rerun_with_overwrite_keeps_registries_stable(
        self, site_root: Path, registry_paths: dict[str, Path]
    ):
        config = Config(project_root=site_root, scaffold=ScaffoldConfig(overwrite=True))
        ComponentScaffolder(config).create("box")
        first = {key: path.read_bytes() for key, path in registry_paths.items()}

        result = ComponentScaffolder(config).create("Box")

        assert {key: path.read_bytes() for key, path in registry_paths.items()} == first
        assert result.patched_files == []

    def test_rerun_without_overwrite_fails_on_existing_component(
        self, site_config: Config, registry_paths: dict[str, Path]
    ):
        scaffolder = ComponentScaffolder(site_config)
        scaffolder.create("box")
        before = {key: path.read_bytes() for key, path in registry_paths.items()}

        with pytest.raises(FileAlreadyExistsError):
            scaffolder.create("box")
        assert {key: path.read_bytes() for key, path in registry_paths.items()} == before

    def test_second_component_appends(self, site_config: Config, registry_paths: dict[str, Path]):
        scaffolder = ComponentScaffolder(site_config)
        scaffolder.create("box")
        scaffolder.create("spinner")
        content = registry_paths["page"].read_text(encoding="utf-8")
        assert content.index("'box',") < content.index("'spinner',") < content.index("// End of illusion slugs")


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestFailures:
    @pytest.mark.parametrize("raw", ["", "   "])
    def test_empty_name_has_no_side_effects(self, site_config: Config, site_root: Path, raw: str):
        before = _snapshot(site_root)
        with pytest.raises(EmptyNameError):
            ComponentScaffolder(site_config).create(raw)
        assert _snapshot(site_root) == before

    def test_missing_marker_keeps_earlier_patches(
        self, site_config: Config, registry_paths: dict[str, Path]
    ):
        view = registry_paths["view"]
        view.write_text(view.read_text(encoding="utf-8").replace("{/*  End of side squares */}", ""), encoding="utf-8")
        view_before = view.read_bytes()

        with pytest.raises(MarkerNotFoundError) as exc_info:
            ComponentScaffolder(site_config).create("box")

        assert exc_info.value.path == view
        # Component file and the first registry file are not rolled back.
        assert (registry_paths["central"].parent / "illusions" / "Box.tsx").exists()
        assert "import Box" in registry_paths["central"].read_text(encoding="utf-8")
        assert view.read_bytes() == view_before
        assert "'box'," not in registry_paths["page"].read_text(encoding="utf-8")

    def test_missing_registry_file_propagates(self, site_config: Config, registry_paths: dict[str, Path]):
        registry_paths["page"].unlink()
        with pytest.raises(FileNotFoundError):
            ComponentScaffolder(site_config).create("box")

    def test_missing_thumbnail_template_after_patches(
        self, site_config: Config, site_root: Path, registry_paths: dict[str, Path]
    ):
        (site_root / "public" / "thumbnails" / "template thumbnail.jpg").unlink()
        with pytest.raises(SourceAssetMissingError):
            ComponentScaffolder(site_config).create("box")
        assert "'box'," in registry_paths["page"].read_text(encoding="utf-8")

    def test_existing_thumbnail_not_clobbered(self, site_config: Config, site_root: Path):
        existing = site_root / "public" / "thumbnails" / "box thumbnail.jpg"
        existing.write_bytes(b"hand drawn")
        with pytest.raises(FileAlreadyExistsError):
            ComponentScaffolder(site_config).create("box")
        assert existing.read_bytes() == b"hand drawn"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class TestCustomLayout:
    def test_custom_template_and_extension(self, site_root: Path):
        template = site_root / "templates" / "square.jsx.j2"
        template.parent.mkdir()
        template.write_text("export const {{ name }} = () => '{{ slug }}';\n", encoding="utf-8")
        config = Config(
            project_root=site_root,
            scaffold=ScaffoldConfig(
                component_template=Path("templates/square.jsx.j2"),
                component_extension=".jsx",
            ),
        )
        result = ComponentScaffolder(config).create("box")
        assert result.component_path.name == "Box.jsx"
        assert result.component_path.read_text(encoding="utf-8") == "export const Box = () => 'box';\n"

    def test_custom_registry_patches(self, site_root: Path):
        registry = site_root / "registry.ts"
        registry.write_text("export const squares = [\n  // squares\n];\n", encoding="utf-8")
        config = Config(
            project_root=site_root,
            scaffold=ScaffoldConfig(
                registry_patches=[
                    RegistryPatch(
                        path=Path("registry.ts"),
                        marker="// squares",
                        probe='"{{ slug }}"',
                        insert='"{{ slug }}",\n  ',
                    )
                ]
            ),
        )
        result = ComponentScaffolder(config).create("Box")
        assert registry.read_text(encoding="utf-8") == 'export const squares = [\n  "box",\n  // squares\n];\n'
        assert list(result.registry_changes) == [registry]
