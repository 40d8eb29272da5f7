#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for converting chapter HTML into a document tree."""

from __future__ import annotations

from dataclasses import dataclass, field

from ao3kit.constants import (
    DEFAULT_DETAILS_SUMMARY,
    DEFAULT_HTML_PARSER,
    DEFAULT_MAX_NESTING_DEPTH,
    HtmlParser,
)
from ao3kit.options.base import CloneFrozenMixin


# src/ao3kit/options/html.py
@dataclass(frozen=True)
class HtmlParserOptions(CloneFrozenMixin):
    """Configuration options for chapter HTML conversion.

    Parameters
    ----------
    html_parser : {"html.parser", "html5lib", "lxml"}, default "html.parser"
        BeautifulSoup tree builder used to tokenize the chapter body.
    images_as_text : bool, default True
        Render ``<img>`` elements as ``[alt]`` placeholder text. When False,
        images are dropped.
    default_details_summary : str, default "Details"
        Summary text used for ``<details>`` elements without a ``<summary>``.
    max_nesting_depth : int, default 100
        Element nesting depth beyond which an element is reduced to its text.

    """

    html_parser: HtmlParser = field(
        default=DEFAULT_HTML_PARSER,
        metadata={"help": "BeautifulSoup parser backend", "choices": ["html.parser", "html5lib", "lxml"]},
    )
    images_as_text: bool = field(
        default=True,
        metadata={"help": "Render images as [alt] placeholder text"},
    )
    default_details_summary: str = field(
        default=DEFAULT_DETAILS_SUMMARY,
        metadata={"help": "Summary text for <details> without <summary>"},
    )
    max_nesting_depth: int = field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        metadata={"help": "Nesting depth beyond which elements are flattened to text"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If max_nesting_depth is less than 1.

        """
        if self.max_nesting_depth < 1:
            raise ValueError(f"max_nesting_depth must be at least 1, got {self.max_nesting_depth}")
