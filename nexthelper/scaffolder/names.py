"""Component name normalisation."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import EmptyNameError


@dataclass(frozen=True)
class ComponentName:
    """A user-entered component name and its two derived forms."""

    raw: str
    capitalized: str
    lower: str

    def as_context(self) -> dict[str, str]:
        """Template context shared by the component file and registry patches."""
        return {"name": self.capitalized, "slug": self.lower}


def capitalize_first(value: str) -> str:
    """Upper-case only the first character (``"myBox"`` -> ``"MyBox"``)."""
    if not value:
        return value
    return value[0].upper() + value[1:]


def normalize_name(raw: str) -> ComponentName:
    """Trim *raw* and derive the capitalized and lower-cased forms.

    Raises:
        EmptyNameError: If nothing is left after trimming.
    """
    name = raw.strip()
    if not name:
        raise EmptyNameError()
    return ComponentName(raw=name, capitalized=capitalize_first(name), lower=name.lower())
