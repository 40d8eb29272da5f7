#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ao3kit/document/nodes.py
"""Document tree node classes for chapter bodies.

This module defines the closed set of node variants a chapter's HTML body is
converted into, together with the style values computed while walking it.

Node Hierarchy
--------------
All nodes inherit from :class:`DocumentNode`. Nodes are frozen dataclasses
holding their children in tuples, so a tree can be shared between threads
and re-rendered under a different skin without re-parsing.

Block-level nodes force a break in rendered output:
    - Paragraph, Heading, Blockquote, CodeBlock, Preformatted
    - HorizontalRule, List, ListItem, Div, Details

Inline nodes never break:
    - Text, Formatted, Link, LineBreak, Span

Style values
------------
- :class:`TextStyle` is the accumulated style at a point in the tree.
  ``parent.merge(child)`` ORs every boolean flag and lets the child's
  ``color``/``alignment`` replace the parent's.
- :class:`ColorInfo` holds normalized RGB channels.

"""

from __future__ import annotations

import hashlib
import logging
import re
from abc import ABC
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from types import MappingProxyType
from typing import ClassVar, Optional

logger = logging.getLogger(__name__)

_HEX_COLOR_PATTERN = re.compile(r"[0-9a-fA-F]{6}")


def stable_hash(value: str) -> int:
    """Return a hash of ``value`` that is identical across processes.

    Python's built-in ``hash`` is salted per process, which would give the
    same class name a different fallback color on every run.

    Parameters
    ----------
    value : str
        String to hash

    Returns
    -------
    int
        Non-negative 64-bit integer

    """
    digest = hashlib.blake2b(value.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big")


class TextAlignment(Enum):
    """Horizontal text alignment."""

    LEADING = "leading"
    CENTER = "center"
    TRAILING = "trailing"
    JUSTIFIED = "justified"

    @classmethod
    def from_html(cls, value: Optional[str]) -> Optional[TextAlignment]:
        """Map an HTML ``align`` attribute value to an alignment.

        Parameters
        ----------
        value : str or None
            Attribute value such as ``"center"`` or ``"right"``

        Returns
        -------
        TextAlignment or None
            Matching alignment, or None for missing/unknown values

        """
        if not value:
            return None
        return _HTML_ALIGNMENTS.get(value.strip().lower())


_HTML_ALIGNMENTS = {
    "left": TextAlignment.LEADING,
    "center": TextAlignment.CENTER,
    "right": TextAlignment.TRAILING,
    "justify": TextAlignment.JUSTIFIED,
}


@dataclass(frozen=True)
class ColorInfo:
    """RGB color with channels normalized to the range [0, 1].

    Parameters
    ----------
    red : float
        Red channel
    green : float
        Green channel
    blue : float
        Blue channel

    """

    red: float
    green: float
    blue: float

    @classmethod
    def from_hex(cls, value: str) -> ColorInfo:
        """Parse a six digit hex color, with or without a leading ``#``.

        Malformed input (non-hex characters, wrong length) yields black
        instead of raising, so a bad skin rule never aborts a render.

        Parameters
        ----------
        value : str
            Hex color such as ``"fc4e47"`` or ``" #FC4E47 "``

        Returns
        -------
        ColorInfo
            Parsed color, or black for malformed input

        Examples
        --------
        >>> ColorInfo.from_hex("#ff0000")
        ColorInfo(red=1.0, green=0.0, blue=0.0)
        >>> ColorInfo.from_hex("zzz")
        ColorInfo(red=0.0, green=0.0, blue=0.0)

        """
        sanitized = value.strip()
        if sanitized.startswith("#"):
            sanitized = sanitized[1:]

        if not _HEX_COLOR_PATTERN.fullmatch(sanitized):
            logger.debug("Malformed hex color %r, falling back to black", value)
            return cls(0.0, 0.0, 0.0)

        return cls._from_bits(int(sanitized, 16))

    @classmethod
    def from_class_name(cls, class_name: str) -> ColorInfo:
        """Derive a deterministic color from a CSS class name.

        Channels come from bits 16-23, 8-15 and 0-7 of the class name's
        stable hash, so the same class always gets the same color.

        Parameters
        ----------
        class_name : str
            CSS class name (e.g. ``"FogLandry"``)

        Returns
        -------
        ColorInfo
            Fallback color for the class

        """
        return cls._from_bits(stable_hash(class_name))

    @classmethod
    def _from_bits(cls, bits: int) -> ColorInfo:
        return cls(
            red=((bits & 0xFF0000) >> 16) / 255.0,
            green=((bits & 0x00FF00) >> 8) / 255.0,
            blue=(bits & 0x0000FF) / 255.0,
        )

    def to_rgb255(self) -> tuple[int, int, int]:
        """Return the channels scaled to integers in 0-255."""
        return (round(self.red * 255), round(self.green * 255), round(self.blue * 255))

    def to_hex(self) -> str:
        """Return the color as a lowercase ``rrggbb`` string."""
        return "{:02x}{:02x}{:02x}".format(*self.to_rgb255())


@dataclass(frozen=True)
class TextStyle:
    """Accumulated text styling at a point in the document tree.

    Used both as the fully merged style of a run and as the style delta a
    single :class:`Formatted` node contributes.

    Parameters
    ----------
    bold, italic, underline, strikethrough, superscript, subscript, code : bool
        Independent formatting flags
    color : ColorInfo or None, default None
        Foreground color override
    alignment : TextAlignment or None, default None
        Paragraph alignment override
    rtl : bool, default False
        Right-to-left text direction

    """

    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    superscript: bool = False
    subscript: bool = False
    code: bool = False
    color: Optional[ColorInfo] = None
    alignment: Optional[TextAlignment] = None
    rtl: bool = False

    def merge(self, child: TextStyle) -> TextStyle:
        """Merge a descendant's style into this (ancestor) style.

        Boolean flags are OR-ed, so a flag set anywhere up the ancestor chain
        stays set. ``color`` and ``alignment`` from ``child`` win when present.
        Always merge root-to-leaf.

        Parameters
        ----------
        child : TextStyle
            Style contributed by a descendant node

        Returns
        -------
        TextStyle
            New merged style

        """
        return TextStyle(
            bold=self.bold or child.bold,
            italic=self.italic or child.italic,
            underline=self.underline or child.underline,
            strikethrough=self.strikethrough or child.strikethrough,
            superscript=self.superscript or child.superscript,
            subscript=self.subscript or child.subscript,
            code=self.code or child.code,
            color=child.color if child.color is not None else self.color,
            alignment=child.alignment if child.alignment is not None else self.alignment,
            rtl=self.rtl or child.rtl,
        )

    def with_color(self, color: Optional[ColorInfo]) -> TextStyle:
        """Return a copy with ``color`` replaced."""
        return replace(self, color=color)

    @property
    def is_plain(self) -> bool:
        """Whether this style carries no formatting at all."""
        return self == TextStyle()

    @property
    def active_flags(self) -> tuple[str, ...]:
        """Names of the boolean flags that are set."""
        return tuple(f.name for f in fields(self) if isinstance(getattr(self, f.name), bool) and getattr(self, f.name))


def _freeze_nodes(nodes: Iterable[DocumentNode]) -> tuple[DocumentNode, ...]:
    return nodes if isinstance(nodes, tuple) else tuple(nodes)


class DocumentNode(ABC):
    """Base class for all document tree nodes.

    ``is_block`` is fixed per variant; block nodes force a line/paragraph
    break in rendered output and inline nodes never do.
    """

    is_block: ClassVar[bool]


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass(frozen=True)
class Paragraph(DocumentNode):
    """Paragraph of inline content.

    Parameters
    ----------
    children : tuple of DocumentNode, default empty
        Inline content
    alignment : TextAlignment or None, default None
        Alignment from the paragraph's ``align`` attribute

    """

    is_block: ClassVar[bool] = True

    children: tuple[DocumentNode, ...] = ()
    alignment: Optional[TextAlignment] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", _freeze_nodes(self.children))


@dataclass(frozen=True)
class Heading(DocumentNode):
    """Heading (h1-h6).

    Parameters
    ----------
    level : int
        Heading level, 1 through 6
    children : tuple of DocumentNode, default empty
        Inline heading content

    """

    is_block: ClassVar[bool] = True

    level: int
    children: tuple[DocumentNode, ...] = ()

    def __post_init__(self) -> None:
        """Validate heading level is between 1 and 6."""
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")
        object.__setattr__(self, "children", _freeze_nodes(self.children))


@dataclass(frozen=True)
class Blockquote(DocumentNode):
    """Quoted block of content."""

    is_block: ClassVar[bool] = True

    children: tuple[DocumentNode, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", _freeze_nodes(self.children))


@dataclass(frozen=True)
class CodeBlock(DocumentNode):
    """Block of literal code, from ``<pre><code>``.

    Parameters
    ----------
    code : str
        Code text, not parsed further
    language : str or None, default None
        Language taken from a ``language-*`` class

    """

    is_block: ClassVar[bool] = True

    code: str
    language: Optional[str] = None


@dataclass(frozen=True)
class Preformatted(DocumentNode):
    """Preformatted text from a ``<pre>`` without ``<code>``."""

    is_block: ClassVar[bool] = True

    text: str


@dataclass(frozen=True)
class HorizontalRule(DocumentNode):
    """Horizontal rule (``<hr>``)."""

    is_block: ClassVar[bool] = True


@dataclass(frozen=True)
class List(DocumentNode):
    """Ordered or unordered list.

    Parameters
    ----------
    ordered : bool
        True for ``<ol>``, False for ``<ul>``
    items : tuple of tuple of DocumentNode, default empty
        One node sequence per direct ``<li>`` child

    """

    is_block: ClassVar[bool] = True

    ordered: bool
    items: tuple[tuple[DocumentNode, ...], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(_freeze_nodes(item) for item in self.items))


@dataclass(frozen=True)
class ListItem(DocumentNode):
    """List item found outside of a list."""

    is_block: ClassVar[bool] = True

    children: tuple[DocumentNode, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", _freeze_nodes(self.children))


@dataclass(frozen=True)
class Div(DocumentNode):
    """Generic block container.

    Parameters
    ----------
    children : tuple of DocumentNode, default empty
        Contained nodes
    attributes : mapping of str to str, default empty
        Presentation attributes kept from the source (``dir``, ``align``, ``class``)

    """

    is_block: ClassVar[bool] = True

    children: tuple[DocumentNode, ...] = ()
    attributes: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", _freeze_nodes(self.children))
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def __hash__(self) -> int:
        return hash((self.children, tuple(sorted(self.attributes.items()))))


@dataclass(frozen=True)
class Details(DocumentNode):
    """Disclosure widget (``<details>``).

    Parameters
    ----------
    summary : tuple of DocumentNode, default empty
        Content of the ``<summary>`` header
    body : tuple of DocumentNode, default empty
        Remaining content

    """

    is_block: ClassVar[bool] = True

    summary: tuple[DocumentNode, ...] = ()
    body: tuple[DocumentNode, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "summary", _freeze_nodes(self.summary))
        object.__setattr__(self, "body", _freeze_nodes(self.body))


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass(frozen=True)
class Text(DocumentNode):
    """Plain text leaf."""

    is_block: ClassVar[bool] = False

    text: str


@dataclass(frozen=True)
class Formatted(DocumentNode):
    """Inline formatting contributing a style delta to its children.

    Parameters
    ----------
    children : tuple of DocumentNode
        Formatted content
    style : TextStyle, default TextStyle()
        Style delta merged into the inherited style
    color_class : str or None, default None
        CSS class whose color is resolved against the work skin at render time

    """

    is_block: ClassVar[bool] = False

    children: tuple[DocumentNode, ...] = ()
    style: TextStyle = field(default_factory=TextStyle)
    color_class: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", _freeze_nodes(self.children))


@dataclass(frozen=True)
class Link(DocumentNode):
    """Hyperlink."""

    is_block: ClassVar[bool] = False

    url: str
    children: tuple[DocumentNode, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", _freeze_nodes(self.children))


@dataclass(frozen=True)
class LineBreak(DocumentNode):
    """Hard line break (``<br>``)."""

    is_block: ClassVar[bool] = False


@dataclass(frozen=True)
class Span(DocumentNode):
    """Grouping span, optionally carrying a work skin class.

    Parameters
    ----------
    children : tuple of DocumentNode, default empty
        Grouped content
    class_name : str or None, default None
        CSS class whose color applies to the children

    """

    is_block: ClassVar[bool] = False

    children: tuple[DocumentNode, ...] = ()
    class_name: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", _freeze_nodes(self.children))


BLOCK_NODE_TYPES: tuple[type[DocumentNode], ...] = (
    Paragraph,
    Heading,
    Blockquote,
    CodeBlock,
    Preformatted,
    HorizontalRule,
    List,
    ListItem,
    Div,
    Details,
)

INLINE_NODE_TYPES: tuple[type[DocumentNode], ...] = (
    Text,
    Formatted,
    Link,
    LineBreak,
    Span,
)
