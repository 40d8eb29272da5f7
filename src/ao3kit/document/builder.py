#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ao3kit/document/builder.py
"""Chapter HTML to document tree converter.

This module turns the tag tree BeautifulSoup produces for a chapter body into
:mod:`ao3kit.document.nodes` values. The conversion is pure tree-shape
translation: no style is computed and no color is resolved, so the same tree
can be re-rendered under a different work skin or host theme.

"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any, Optional

from bs4 import BeautifulSoup, FeatureNotFound
from bs4.element import NavigableString, PreformattedString, Tag

from ao3kit.constants import DEFAULT_IMAGE_ALT_TEXT, DROPPED_HTML_ELEMENTS
from ao3kit.document.nodes import (
    Blockquote,
    CodeBlock,
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
)
from ao3kit.exceptions import ValidationError
from ao3kit.options.html import HtmlParserOptions

logger = logging.getLogger(__name__)

_LANGUAGE_CLASS_PATTERN = re.compile(r"(?:language|lang)-([a-zA-Z0-9_+\-]+)")


class HtmlToDocumentConverter:
    """Convert chapter HTML into a document tree.

    Parameters
    ----------
    options : HtmlParserOptions or None, default = None
        Conversion options

    Examples
    --------
    >>> converter = HtmlToDocumentConverter()
    >>> nodes = converter.convert("<p>Hello <b>world</b></p>")
    >>> nodes[0].children[0]
    Text(text='Hello ')

    """

    # Elements that start a new block; whitespace next to them is insignificant
    BLOCK_ELEMENTS = frozenset(
        {
            "address",
            "article",
            "aside",
            "blockquote",
            "body",
            "caption",
            "center",
            "dd",
            "details",
            "dialog",
            "div",
            "dl",
            "dt",
            "fieldset",
            "figcaption",
            "figure",
            "footer",
            "form",
            "h1",
            "h2",
            "h3",
            "h4",
            "h5",
            "h6",
            "header",
            "hr",
            "html",
            "li",
            "main",
            "nav",
            "ol",
            "p",
            "pre",
            "section",
            "summary",
            "table",
            "tbody",
            "td",
            "tfoot",
            "th",
            "thead",
            "tr",
            "ul",
        }
    )

    # Inline formatting tags and the style delta each contributes
    FORMATTING_STYLES = {
        "b": TextStyle(bold=True),
        "strong": TextStyle(bold=True),
        "em": TextStyle(italic=True),
        "i": TextStyle(italic=True),
        "cite": TextStyle(italic=True),
        "q": TextStyle(italic=True),
        "abbr": TextStyle(italic=True),
        "kbd": TextStyle(italic=True),
        "samp": TextStyle(italic=True),
        "var": TextStyle(italic=True),
        "dfn": TextStyle(italic=True),
        "u": TextStyle(underline=True),
        "ins": TextStyle(underline=True),
        "s": TextStyle(strikethrough=True),
        "strike": TextStyle(strikethrough=True),
        "del": TextStyle(strikethrough=True),
        "sup": TextStyle(superscript=True),
        "sub": TextStyle(subscript=True),
        "code": TextStyle(code=True),
    }

    # Dispatch table mapping HTML element names to conversion methods
    _ELEMENT_HANDLERS = {
        "p": "_convert_paragraph",
        "h1": "_convert_heading",
        "h2": "_convert_heading",
        "h3": "_convert_heading",
        "h4": "_convert_heading",
        "h5": "_convert_heading",
        "h6": "_convert_heading",
        "blockquote": "_convert_blockquote",
        "pre": "_convert_pre",
        "hr": "_convert_horizontal_rule",
        "ul": "_convert_list",
        "ol": "_convert_list",
        "li": "_convert_list_item",
        "div": "_convert_div",
        "details": "_convert_details",
        "span": "_convert_span",
        "a": "_convert_link",
        "br": "_convert_line_break",
        "img": "_convert_image",
    }

    def __init__(self, options: HtmlParserOptions | None = None):
        """Initialize the converter with options."""
        self.options: HtmlParserOptions = options or HtmlParserOptions()
        self._depth = 0

    def convert(self, html: str) -> tuple[DocumentNode, ...]:
        """Parse an HTML fragment and convert it to document nodes.

        Parameters
        ----------
        html : str
            Chapter body markup

        Returns
        -------
        tuple of DocumentNode
            Top-level nodes in document order

        Raises
        ------
        ValidationError
            If the configured parser backend is not installed

        """
        try:
            soup = BeautifulSoup(html, self.options.html_parser)
        except FeatureNotFound as e:
            raise ValidationError(
                f"HTML parser {self.options.html_parser!r} is not available; "
                f"install it with 'pip install ao3kit[{self.options.html_parser}]'",
                parameter_name="html_parser",
                parameter_value=self.options.html_parser,
                original_error=e,
            ) from e
        return self.convert_tag(soup)

    def convert_tag(self, tag: Tag) -> tuple[DocumentNode, ...]:
        """Convert the children of an already parsed tag.

        The tag itself is treated as the enclosing block container.

        Parameters
        ----------
        tag : bs4.element.Tag
            Root of the tag tree (a ``BeautifulSoup`` object is also a tag)

        Returns
        -------
        tuple of DocumentNode
            Converted children in document order

        """
        return tuple(self._convert_nodes(list(tag.children), block_context=True))

    def _convert_nodes(self, nodes: Sequence[Any], block_context: bool) -> list[DocumentNode]:
        """Convert sibling tag-tree nodes, splicing results in order.

        Parameters
        ----------
        nodes : sequence
            Sibling BeautifulSoup nodes
        block_context : bool
            Whether the siblings sit directly inside a block container, which
            makes whitespace at either end insignificant

        Returns
        -------
        list of DocumentNode
            Converted nodes

        """
        result: list[DocumentNode] = []
        for index, node in enumerate(nodes):
            if isinstance(node, PreformattedString):
                # Comments, doctypes, CDATA, processing instructions
                continue

            if isinstance(node, NavigableString):
                text = str(node)
                if not text:
                    continue
                if text.isspace() and self._is_insignificant_whitespace(nodes, index, block_context):
                    continue
                result.append(Text(text))
                continue

            if isinstance(node, Tag):
                result.extend(self._convert_element(node))

        return result

    def _convert_children(self, tag: Tag) -> list[DocumentNode]:
        return self._convert_nodes(list(tag.children), block_context=self._is_block_element(tag))

    def _is_block_element(self, node: Any) -> bool:
        return isinstance(node, Tag) and node.name in self.BLOCK_ELEMENTS

    def _is_insignificant_whitespace(self, nodes: Sequence[Any], index: int, block_context: bool) -> bool:
        """Check whether a whitespace-only text node touches a block boundary."""
        previous_node = nodes[index - 1] if index > 0 else None
        next_node = nodes[index + 1] if index + 1 < len(nodes) else None

        if block_context and (previous_node is None or next_node is None):
            return True
        return self._is_block_element(previous_node) or self._is_block_element(next_node)

    def _convert_element(self, node: Tag) -> list[DocumentNode]:
        """Convert a single element to zero or more document nodes."""
        name = (node.name or "").lower()

        if name in DROPPED_HTML_ELEMENTS or name in ("head", "title"):
            return []

        if self._depth >= self.options.max_nesting_depth:
            logger.debug("Element <%s> nested deeper than %d levels, keeping its text only", name, self._depth)
            text = self._flatten_text(node)
            return [Text(text)] if text else []

        self._depth += 1
        try:
            return self._dispatch_element(node, name)
        finally:
            self._depth -= 1

    def _dispatch_element(self, node: Tag, name: str) -> list[DocumentNode]:
        style =self.FORMATTING_STYLES.get(name)
        if style is not None:
            return [Formatted(self._convert_children(node), style, color_class=self._first_class(node))]

        handler_name = self._ELEMENT_HANDLERS.get(name)
        if handler_name:
            handler = getattr(self, handler_name)
            return handler(node)

        # Unsupported element: keep its content in place
        if name not in ("summary", "html", "body"):
            logger.debug("Unsupported element <%s>, splicing its children", name)
        return self._convert_children(node)

    # ------------------------------------------------------------------
    # Block elements
    # ------------------------------------------------------------------

    def _convert_paragraph(self, node: Tag) -> list[DocumentNode]:
        alignment = TextAlignment.from_html(self._attribute(node, "align"))
        return [Paragraph(self._convert_children(node), alignment=alignment)]

    def _convert_heading(self, node: Tag) -> list[DocumentNode]:
        level = int(node.name[1])
        return [Heading(level=level, children=self._convert_children(node))]

    def _convert_blockquote(self, node: Tag) -> list[DocumentNode]:
        return [Blockquote(self._convert_children(node))]

    def _convert_pre(self, node: Tag) -> list[DocumentNode]:
        """Convert ``<pre>`` to a code block when it only wraps ``<code>``.

        Any other content next to the ``<code>`` element makes the whole
        element preformatted text, so nothing around the code is lost.
        """
        content = [child for child in node.children if not self._is_blank(child)]
        if len(content) == 1 and isinstance(content[0], Tag) and content[0].name == "code":
            code = content[0]
            language = self._extract_language(code) or self._extract_language(node)
            return [CodeBlock(code=code.get_text(), language=language)]
        return [Preformatted(text=node.get_text())]

    def _convert_horizontal_rule(self, node: Tag) -> list[DocumentNode]:
        return [HorizontalRule()]

    def _convert_list(self, node: Tag) -> list[DocumentNode]:
        """Convert ``<ul>``/``<ol>`` into a list plus any stray content.

        Only direct ``<li>`` children become items. Other children that carry
        text are converted and placed right after the list so their content
        is not lost.
        """
        items: list[tuple[DocumentNode, ...]] = []
        stray: list[DocumentNode] = []

        for child in node.children:
            if isinstance(child, Tag) and child.name == "li":
                items.append(tuple(self._convert_children(child)))
            elif isinstance(child, Tag):
                stray.extend(self._convert_element(child))
            elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
                if str(child).strip():
                    stray.append(Text(str(child)))

        return [List(ordered=node.name == "ol", items=tuple(items)), *stray]

    def _convert_list_item(self, node: Tag) -> list[DocumentNode]:
        return [ListItem(self._convert_children(node))]

    def _convert_div(self, node: Tag) -> list[DocumentNode]:
        attributes: dict[str, str] = {}
        for name in ("dir", "align"):
            value = self._attribute(node, name)
            if value:
                attributes[name] = value
        classes = self._classes(node)
        if classes:
            attributes["class"] = " ".join(classes)
        return [Div(self._convert_children(node), attributes=attributes)]

    def _convert_details(self, node: Tag) -> list[DocumentNode]:
        summary_tag = node.find("summary", recursive=False)
        if isinstance(summary_tag, Tag):
            summary = self._convert_children(summary_tag)
        else:
            summary = [Text(self.options.default_details_summary)]

        body_nodes = [child for child in node.children if child is not summary_tag]
        body = self._convert_nodes(body_nodes, block_context=True)
        return [Details(summary=tuple(summary), body=tuple(body))]

    # ------------------------------------------------------------------
    # Inline elements
    # ------------------------------------------------------------------

    def _convert_span(self, node: Tag) -> list[DocumentNode]:
        span = Span(self._convert_children(node), class_name=self._first_class(node))
        if (self._attribute(node, "dir") or "").lower() == "rtl":
            return [Formatted((span,), TextStyle(rtl=True))]
        return [span]

    def _convert_link(self, node: Tag) -> list[DocumentNode]:
        return [Link(url=self._attribute(node, "href") or "", children=self._convert_children(node))]

    def _convert_line_break(self, node: Tag) -> list[DocumentNode]:
        return [LineBreak()]

    def _convert_image(self, node: Tag) -> list[DocumentNode]:
        if not self.options.images_as_text:
            return []
        alt = (self._attribute(node, "alt") or "").strip() or DEFAULT_IMAGE_ALT_TEXT
        return [Text(f"[{alt}]")]

    # ------------------------------------------------------------------
    # Attribute helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _is_blank(node: Any) -> bool:
        if isinstance(node, PreformattedString):
            return True
        return isinstance(node, NavigableString) and not node.strip()

    @staticmethod
    def _flatten_text(node: Tag) -> str:
        """Concatenate the chapter text under ``node`` without recursing."""
        parts = []
        for string in node.find_all(string=True):
            if isinstance(string, PreformattedString):
                continue
            if any(parent.name in DROPPED_HTML_ELEMENTS for parent in string.parents):
                continue
            parts.append(str(string))
        return "".join(parts)

    @staticmethod
    def _attribute(node: Tag, name: str) -> Optional[str]:
        value = node.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    @staticmethod
    def _classes(node: Tag) -> list[str]:
        classes = node.get("class")
        if not classes:
            return []
        if isinstance(classes, str):
            return classes.split()
        return list(classes)

    def _first_class(self, node: Tag) -> Optional[str]:
        classes = self._classes(node)
        return classes[0] if classes else None

    def _extract_language(self, node: Tag) -> Optional[str]:
        for cls in self._classes(node):
            if match := _LANGUAGE_CLASS_PATTERN.fullmatch(cls):
                return match.group(1)
        return None


def parse_chapter_html(html: str, options: HtmlParserOptions | None = None) -> tuple[DocumentNode, ...]:
    """Convert a chapter body to document nodes.

    Parameters
    ----------
    html : str
        Chapter body markup
    options : HtmlParserOptions or None, default = None
        Conversion options

    Returns
    -------
    tuple of DocumentNode
        Top-level nodes in document order

    """
    return HtmlToDocumentConverter(options).convert(html)
