#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ao3kit/document/colors.py
"""Class-name color resolution.

Work skins use arbitrary class names that cannot be enumerated in advance,
so a class either maps to an explicit skin color or to a deterministic
fallback derived from its name.
"""

from __future__ import annotations

from typing import Optional

from ao3kit.document.nodes import ColorInfo
from ao3kit.document.skin import EMPTY_SKIN, WorkSkin


def resolve_color(class_name: str, skin: Optional[WorkSkin] = None) -> ColorInfo:
    """Resolve the text color for a CSS class.

    Parameters
    ----------
    class_name : str
        CSS class name taken from the chapter markup
    skin : WorkSkin or None, default None
        Work skin to consult; None behaves like an empty skin

    Returns
    -------
    ColorInfo
        The skin's color parsed from hex (black if the hex is malformed), or
        the class name's deterministic fallback color when the skin has no entry

    Examples
    --------
    >>> skin = WorkSkin({"x": "fc4e47"})
    >>> resolve_color("x", skin).to_hex()
    'fc4e47'

    """
    hex_color = (skin or EMPTY_SKIN).color_for(class_name)
    if hex_color is not None:
        return ColorInfo.from_hex(hex_color)
    return ColorInfo.from_class_name(class_name)
