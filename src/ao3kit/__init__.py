"""ao3kit - A client core for rendering Archive of Our Own chapters.

ao3kit fetches chapter pages, converts a chapter's HTML body into an
immutable document tree, and walks that tree to resolve inherited styling
into a flat sequence of styled text runs and block breaks that any host
(terminal, GUI toolkit, e-reader) can lay out.

Key Features
------------
- Closed set of document node variants with an OR-merge style algebra
- Per-work skin colors scraped from ``#workskin`` stylesheets
- Deterministic fallback colors for classes the skin does not define
- Thread-safe, copy-on-recurse render walk
- Plain text / ANSI reference renderer and command line interface

Examples
--------
Render a chapter body with its work skin:

    >>> from ao3kit import render_chapter_text
    >>> print(render_chapter_text("<p>Hello <b>world</b></p>"))
    Hello world

See Also
--------
ao3kit.document : Document model and render walk
ao3kit.client : Chapter page fetching

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

__version__ = "1.0.0"

from ao3kit.api import render_chapter, render_chapter_text
from ao3kit.client import Ao3Client, Chapter
from ao3kit.document import (
    BlockBreak,
    BlockKind,
    ColorInfo,
    DocumentRenderer,
    RenderContext,
    StyledRun,
    TextStyle,
    WorkSkin,
    parse_chapter_html,
    render,
    resolve_color,
)
from ao3kit.exceptions import (
    Ao3KitError,
    FetchError,
    InvalidStatusCodeError,
    ParsingError,
    RestrictedWorkError,
    TooManyRedirectsError,
    ValidationError,
)
from ao3kit.options import ClientOptions, HtmlParserOptions, PlainTextOptions

__all__ = [
    "__version__",
    # Main API
    "render_chapter",
    "render_chapter_text",
    "parse_chapter_html",
    "render",
    "resolve_color",
    # Document model
    "BlockBreak",
    "BlockKind",
    "ColorInfo",
    "DocumentRenderer",
    "RenderContext",
    "StyledRun",
    "TextStyle",
    "WorkSkin",
    # Client
    "Ao3Client",
    "Chapter",
    # Options
    "ClientOptions",
    "HtmlParserOptions",
    "PlainTextOptions",
    # Exceptions
    "Ao3KitError",
    "FetchError",
    "InvalidStatusCodeError",
    "ParsingError",
    "RestrictedWorkError",
    "TooManyRedirectsError",
    "ValidationError",
]
