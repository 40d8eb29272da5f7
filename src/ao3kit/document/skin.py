#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ao3kit/document/skin.py
"""Work skin color tables.

A work skin is the custom ``<style>`` block an author attaches to a work.
Only its per-class text colors matter here: they are scraped once per work
into an immutable :class:`WorkSkin` and consulted while rendering.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Optional

logger = logging.getLogger(__name__)

# "#workskin .ClassName { ... color: #hex ... }" - only the color property, not background-color
_SKIN_RULE_PATTERN = re.compile(
    r"#workskin\s+\.([\w-]+)\s*\{([^}]*)\}",
    re.IGNORECASE,
)
_COLOR_DECLARATION_PATTERN = re.compile(
    r"(?<![\w-])color\s*:\s*#([0-9a-fA-F]{6}|[0-9a-fA-F]{3})\b",
    re.IGNORECASE,
)


def _normalize_hex(value: str) -> str:
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    return value.lower()


@dataclass(frozen=True)
class WorkSkin:
    """Immutable mapping of CSS class name to raw hex color string.

    Lookups are exact and case-sensitive. Missing entries are not an error;
    callers fall back to the deterministic class-name color.

    Parameters
    ----------
    colors : mapping of str to str, default empty
        Class name to hex color without ``#`` (e.g. ``{"FogLandry": "fc4e47"}``)

    Examples
    --------
    >>> skin = WorkSkin.from_css("#workskin .Narrator { color: #FC4E47; }")
    >>> skin.color_for("Narrator")
    'fc4e47'

    """

    colors: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "colors", MappingProxyType(dict(self.colors)))

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.colors.items())))

    @classmethod
    def from_css(cls, css: Optional[str]) -> WorkSkin:
        """Scrape class colors from a work skin stylesheet.

        Parameters
        ----------
        css : str or None
            Contents of the work's ``<style>`` block

        Returns
        -------
        WorkSkin
            Skin holding one entry per ``#workskin .Class`` rule with a color;
            empty when ``css`` is None or empty

        """
        if not css:
            return cls()

        colors: dict[str, str] = {}
        for rule in _SKIN_RULE_PATTERN.finditer(css):
            class_name, declarations = rule.group(1), rule.group(2)
            # Last declaration in a rule wins, as do later rules for the same class
            values = _COLOR_DECLARATION_PATTERN.findall(declarations)
            if values:
                colors[class_name] = _normalize_hex(values[-1])

        logger.debug("Parsed %d work skin color(s)", len(colors))
        return cls(colors)

    def color_for(self, class_name: str) -> Optional[str]:
        """Return the raw hex color for ``class_name``, or None if undefined."""
        return self.colors.get(class_name)

    def has_color(self, class_name: str) -> bool:
        """Check if a color is defined for the given class."""
        return class_name in self.colors

    @property
    def class_names(self) -> list[str]:
        """Class names that have colors defined."""
        return list(self.colors)

    def __len__(self) -> int:
        return len(self.colors)

    def __iter__(self) -> Iterator[str]:
        return iter(self.colors)


EMPTY_SKIN = WorkSkin()
