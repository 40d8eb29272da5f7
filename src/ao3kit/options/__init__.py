"""Option objects for ao3kit parsing, rendering and fetching."""

from ao3kit.options.base import CloneFrozenMixin
from ao3kit.options.client import ClientOptions
from ao3kit.options.html import HtmlParserOptions
from ao3kit.options.plaintext import PlainTextOptions

__all__ = [
    "CloneFrozenMixin",
    "ClientOptions",
    "HtmlParserOptions",
    "PlainTextOptions",
]
