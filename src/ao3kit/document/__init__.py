#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ao3kit/document/__init__.py
"""Document model and style resolution for chapter bodies.

The module consists of several components:

- nodes: document tree node classes plus the ``TextStyle`` and ``ColorInfo`` values
- skin: per-work class color tables scraped from a work skin stylesheet
- colors: two-tier class color resolution (skin first, deterministic fallback)
- builder: conversion of a BeautifulSoup tag tree into a document tree
- render: the style-resolution walk emitting ``StyledRun``/``BlockBreak`` values

Examples
--------
    >>> from ao3kit.document import StyledRun, parse_chapter_html, render
    >>> items = render(parse_chapter_html("<p>Hello <b>world</b></p>"))
    >>> [item.text for item in items if isinstance(item, StyledRun)]
    ['Hello ', 'world']

"""

from __future__ import annotations

from ao3kit.document.builder import HtmlToDocumentConverter, parse_chapter_html
from ao3kit.document.colors import resolve_color
from ao3kit.document.nodes import (
    BLOCK_NODE_TYPES,
    INLINE_NODE_TYPES,
    Blockquote,
    CodeBlock,
    ColorInfo,
    Details,
    Div,
    DocumentNode,
    Formatted,
    Heading,
    HorizontalRule,
    LineBreak,
    Link,
    List,
    ListItem,
    Paragraph,
    Preformatted,
    Span,
    Text,
    TextAlignment,
    TextStyle,
    stable_hash,
)
from ao3kit.document.render import (
    BlockBreak,
    BlockKind,
    DocumentRenderer,
    FontDesign,
    RenderContext,
    RenderItem,
    StyledRun,
    render,
)
from ao3kit.document.skin import EMPTY_SKIN, WorkSkin

__all__ = [
    # Nodes
    "DocumentNode",
    "Paragraph",
    "Heading",
    "Blockquote",
    "CodeBlock",
    "Preformatted",
    "HorizontalRule",
    "List",
    "ListItem",
    "Div",
    "Details",
    "Text",
    "Formatted",
    "Link",
    "LineBreak",
    "Span",
    "BLOCK_NODE_TYPES",
    "INLINE_NODE_TYPES",
    # Style values
    "TextStyle",
    "TextAlignment",
    "ColorInfo",
    "stable_hash",
    # Skins and colors
    "WorkSkin",
    "EMPTY_SKIN",
    "resolve_color",
    # Construction
    "HtmlToDocumentConverter",
    "parse_chapter_html",
    # Rendering
    "RenderContext",
    "DocumentRenderer",
    "StyledRun",
    "BlockBreak",
    "BlockKind",
    "FontDesign",
    "RenderItem",
    "render",
]
