"""Jinja2 template rendering for component scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``nexthelper/scaffolder/templates/`` directory (or a user-supplied directory)
and renders them with the component context (``name`` and ``slug``).  Inline
strings such as registry fragments and thumbnail names go through the same
environment so every placeholder is substituted the same way.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .errors import FileAlreadyExistsError


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

COMPONENT_TEMPLATE = "component.tsx.j2"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for component scaffolding.

    Undefined variables raise instead of rendering as empty strings, so a
    template that references anything other than ``name``/``slug`` fails
    loudly rather than producing a half-filled component.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )

    @classmethod
    def for_template_file(cls, template_file: str | Path) -> tuple["TemplateRenderer", str]:
        """Return a renderer rooted at *template_file*'s folder and its name."""
        path = Path(template_file)
        return cls(path.parent), path.name

    # -- Rendering ---------------------------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"component.tsx.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        template = self.env.from_string(template_string)
        return template.render(**context)

    def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
        *,
        overwrite: bool = False,
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically.

        Raises:
            FileAlreadyExistsError: If *output_path* exists and *overwrite*
                is off.  Nothing is written in that case.
        """
        content = self.render(template_path, context)
        out = Path(output_path)
        if out.exists() and not overwrite:
            raise FileAlreadyExistsError(out)
        _write_file(out, content)
        return out


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
