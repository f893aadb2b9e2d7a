"""Shared pytest fixtures for the nexthelper test suite.

Provides a temporary site tree seeded with the registry files the scaffolder
patches, plus a matching ``Config``.
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from nexthelper.config import Config


# ---------------------------------------------------------------------------
# Registry file contents
# ---------------------------------------------------------------------------

CENTRAL_SQUARE = textwrap.dedent(
    """\
    'use client';
    import Default from './Default';

    import Tarzan from './illusions/Tarzan';
    // End of Imports

    interface Props {
      slug: string | null
    }

    export default function CentralSquare(props: Props) {
      let content = <Default />;

      if(props.slug?.toLowerCase() == "tarzan")
        content = <Tarzan />
      // End of content section
      return (
        <div>{content}</div>
      )
    }
    """
)

SQUARE_VIEW = textwrap.dedent(
    """\
    import CentralSquare from './CentralSquare';
    import SideSquare from './SideSquare';
    import Tarzan from './illusions/Tarzan';
    // End of Imports

    export default function SquareView(props: { slug: string }) {
      return (
        <div>
          <CentralSquare slug={props.slug} />
          <div className="side">
            <SideSquare link="/tarzan" title="Tarzan" imageName="thumbnails/tarzan thumbnail.jpg"/>
            {/*  End of side squares */}
          </div>
        </div>
      )
    }
    """
)

SQUARE_PAGE = textwrap.dedent(
    """\
    export async function generateStaticParams() {
      const illusions = [
        'tarzan',
        // End of illusion slugs
        ];
      return illusions.map((page)=>( {square: page} ));
    }
    """
)

THUMBNAIL_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00template-thumbnail\xff\xd9"


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Temporary site tree with registry files and a template thumbnail."""
    root = tmp_path / "site"
    components = root / "src" / "app" / "_components"
    (components / "illusions").mkdir(parents=True)
    (components / "CentralSquare.tsx").write_text(CENTRAL_SQUARE, encoding="utf-8")
    (components / "SquareView.tsx").write_text(SQUARE_VIEW, encoding="utf-8")

    square = root / "src" / "app" / "[square]"
    square.mkdir(parents=True)
    (square / "page.tsx").write_text(SQUARE_PAGE, encoding="utf-8")

    thumbnails = root / "public" / "thumbnails"
    thumbnails.mkdir(parents=True)
    (thumbnails / "template thumbnail.jpg").write_bytes(THUMBNAIL_BYTES)
    yield root


@pytest.fixture
def site_config(site_root: Path) -> Config:
    """Default configuration pointed at the seeded site tree."""
    return Config(project_root=site_root)


@pytest.fixture
def registry_paths(site_root: Path) -> dict[str, Path]:
    """Registry files of the seeded site, keyed by short name."""
    return {
        "central": site_root / "src" / "app" / "_components" / "CentralSquare.tsx",
        "view": site_root / "src" / "app" / "_components" / "SquareView.tsx",
        "page": site_root / "src" / "app" / "[square]" / "page.tsx",
    }
