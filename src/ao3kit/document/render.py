#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ao3kit/document/render.py
"""Style-resolution walk over a document tree.

The walker carries a :class:`RenderContext` down the tree (list depth, list
counters, merged style, work skin, host defaults) and flattens the tree into
an ordered sequence of :class:`StyledRun` and :class:`BlockBreak` values that
a host presentation layer maps onto its own text attributes.

The context is a frozen value. Every recursive call receives its own copy,
so sibling subtrees see independent list counters and nothing reachable by
another thread is mutated; chapters can be rendered in parallel without
locks.

"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Union

from ao3kit.constants import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_FONT_SIZE,
    DEFAULT_LINK_COLOR,
    DEFAULT_MAX_NESTING_DEPTH,
    DEFAULT_TEXT_COLOR,
    HEADING_SIZE_MULTIPLIERS,
    UNORDERED_LIST_BULLETS,
)
from ao3kit.document.colors import resolve_color
from ao3kit.document.nodes import (
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
)
from ao3kit.document.skin import WorkSkin

logger = logging.getLogger(__name__)


class FontDesign(Enum):
    """Font design tag understood by host renderers."""

    DEFAULT = "default"
    SERIF = "serif"
    ROUNDED = "rounded"
    MONOSPACED = "monospaced"


class BlockKind(Enum):
    """Kind of structural boundary a :class:`BlockBreak` marks."""

    PARAGRAPH = "paragraph"
    HEADING = "heading"
    BLOCKQUOTE = "blockquote"
    CODE_BLOCK = "code_block"
    PREFORMATTED = "preformatted"
    HORIZONTAL_RULE = "horizontal_rule"
    LIST = "list"
    LIST_ITEM = "list_item"
    DIV = "div"
    DETAILS_SUMMARY = "details_summary"
    DETAILS_BODY = "details_body"
    EMPTY = "empty"


@dataclass(frozen=True)
class StyledRun:
    """Contiguous text paired with its fully resolved style.

    Parameters
    ----------
    text : str
        Run text
    style : TextStyle
        Merged style at the run's position in the tree
    font_size : float
        Point size, the host base size scaled inside headings
    font_design : FontDesign
        Host font design, or monospaced for code
    foreground : ColorInfo
        Style color if set, otherwise the host text color
    link : str or None, default None
        Target URL when the run is inside a link

    """

    text: str
    style: TextStyle
    font_size: float = DEFAULT_FONT_SIZE
    font_design: FontDesign = FontDesign.DEFAULT
    foreground: ColorInfo = field(default_factory=lambda: ColorInfo(*DEFAULT_TEXT_COLOR))
    link: Optional[str] = None


@dataclass(frozen=True)
class BlockBreak:
    """Structural boundary in the rendered output.

    Parameters
    ----------
    kind : BlockKind
        Block variant that opened here
    label : str or None, default None
        List item label (``"3."`` or a bullet glyph)
    level : int or None, default None
        Heading level
    depth : int, default 0
        List nesting depth
    indent : int, default 0
        Blockquote / details nesting
    alignment : TextAlignment or None, default None
        Alignment in effect for the block
    language : str or None, default None
        Code block language

    """

    kind: BlockKind
    label: Optional[str] = None
    level: Optional[int] = None
    depth: int = 0
    indent: int = 0
    alignment: Optional[TextAlignment] = None
    language: Optional[str] = None


RenderItem = Union[StyledRun, BlockBreak]


@dataclass(frozen=True)
class RenderContext:
    """Traversal state threaded by value through the render walk.

    Parameters
    ----------
    list_depth : int, default 0
        Number of enclosing lists
    list_counters : tuple of int, default empty
        One item counter per open list, innermost last
    style : TextStyle, default TextStyle()
        Merged style inherited from ancestors
    work_skin : WorkSkin, default empty skin
        Class color table for the work being rendered
    font_size : float, default 17.0
        Host base font size
    font_design : FontDesign, default FontDesign.DEFAULT
        Host font design
    text_color : ColorInfo, default black
        Host text color used when no style color applies
    background_color : ColorInfo, default white
        Host background color
    indent_level : int, default 0
        Blockquote / details nesting
    link_url : str or None, default None
        URL of the enclosing link
    heading_level : int or None, default None
        Level of the enclosing heading
    nesting_depth : int, default 0
        Number of enclosing nodes

    """

    list_depth: int = 0
    list_counters: tuple[int, ...] = ()
    style: TextStyle = field(default_factory=TextStyle)
    work_skin: WorkSkin = field(default_factory=WorkSkin)
    font_size: float = DEFAULT_FONT_SIZE
    font_design: FontDesign = FontDesign.DEFAULT
    text_color: ColorInfo = field(default_factory=lambda: ColorInfo(*DEFAULT_TEXT_COLOR))
    background_color: ColorInfo = field(default_factory=lambda: ColorInfo(*DEFAULT_BACKGROUND_COLOR))
    indent_level: int = 0
    link_url: Optional[str] = None
    heading_level: Optional[int] = None
    nesting_depth: int = 0

    def __post_init__(self) -> None:
        """Validate host defaults.

        Raises
        ------
        ValueError
            If the font size is not positive.

        """
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive, got {self.font_size}")

    def incrementing_list_depth(self) -> RenderContext:
        """Return a copy entering a new list level with a fresh counter."""
        return replace(self, list_depth=self.list_depth + 1, list_counters=self.list_counters + (0,))

    def incrementing_counter(self) -> RenderContext:
        """Return a copy with the innermost list counter advanced by one."""
        if not self.list_counters:
            return self
        return replace(self, list_counters=self.list_counters[:-1] + (self.list_counters[-1] + 1,))

    @property
    def current_counter(self) -> int:
        """Counter of the innermost open list, 0 when no list is open."""
        return self.list_counters[-1] if self.list_counters else 0

    def list_label(self, ordered: bool) -> str:
        """Label for the current list item.

        Parameters
        ----------
        ordered : bool
            Whether the enclosing list is ordered

        Returns
        -------
        str
            ``"<n>."`` for ordered lists, otherwise a bullet glyph that
            cycles with nesting depth

        """
        if ordered and self.list_counters:
            return f"{self.current_counter}."
        depth = max(self.list_depth, 1)
        return UNORDERED_LIST_BULLETS[(depth - 1) % len(UNORDERED_LIST_BULLETS)]

    def with_style(self, style: TextStyle) -> RenderContext:
        """Return a copy with ``style`` replaced."""
        return replace(self, style=style)

    def merging_style(self, delta: TextStyle) -> RenderContext:
        """Return a copy with ``delta`` merged into the current style."""
        return replace(self, style=self.style.merge(delta))

    @property
    def effective_font_size(self) -> float:
        """Font size for runs at this position."""
        if self.heading_level is None:
            return self.font_size
        return self.font_size * HEADING_SIZE_MULTIPLIERS.get(self.heading_level, 1.0)


_LINK_STYLE = TextStyle(underline=True, color=ColorInfo(*DEFAULT_LINK_COLOR))
_CODE_STYLE = TextStyle(code=True)


class DocumentRenderer:
    """Flatten a document tree into styled runs and block breaks.

    The renderer keeps no per-render state, so one instance may be shared
    between threads.

    Parameters
    ----------
    max_depth : int, default 100
        Node nesting depth at which a subtree is no longer walked; its text
        is emitted as a single run in the style reached so far

    Examples
    --------
    >>> from ao3kit.document.nodes import Paragraph, Text
    >>> items = DocumentRenderer().render([Paragraph([Text("hello")])])
    >>> [type(item).__name__ for item in items]
    ['BlockBreak', 'StyledRun']

    """

    # Dispatch table mapping node types to rendering methods
    _NODE_HANDLERS = {
        Paragraph: "_render_paragraph",
        Heading: "_render_heading",
        Blockquote: "_render_blockquote",
        CodeBlock: "_render_code_block",
        Preformatted: "_render_preformatted",
        HorizontalRule: "_render_horizontal_rule",
        List: "_render_list",
        ListItem: "_render_list_item",
        Div: "_render_div",
        Details: "_render_details",
        Text: "_render_text",
        Formatted: "_render_formatted",
        Link: "_render_link",
        LineBreak: "_render_line_break",
        Span: "_render_span",
    }

    def __init__(self, max_depth: int = DEFAULT_MAX_NESTING_DEPTH):
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self.max_depth = max_depth

    def render(self, nodes: Iterable[DocumentNode], context: Optional[RenderContext] = None) -> list[RenderItem]:
        """Render nodes depth-first, left-to-right.

        Parameters
        ----------
        nodes : iterable of DocumentNode
            Top-level nodes of a chapter
        context : RenderContext or None, default None
            Initial context; a default context with an empty skin when None

        Returns
        -------
        list of StyledRun or BlockBreak
            Output in document order

        """
        output: list[RenderItem] = []
        self._render_nodes(nodes, context or RenderContext(), output)
        return output

    def _render_nodes(self, nodes: Iterable[DocumentNode], context: RenderContext, output: list[RenderItem]) -> None:
        for node in nodes:
            self._render_node(node, context, output)

    def _render_node(self, node: DocumentNode, context: RenderContext, output: list[RenderItem]) -> None:
        if context.nesting_depth >= self.max_depth:
            self._render_flattened(node, context, output)
            return
        context = replace(context, nesting_depth=context.nesting_depth + 1)

        handler_name = self._handler_name(type(node))
        if handler_name is None:
            logger.debug("Unrecognized node %s rendered as an empty block", type(node).__name__)
            output.append(self._block_break(BlockKind.EMPTY, context))
            return
        getattr(self, handler_name)(node, context, output)

    def _handler_name(self, node_type: type) -> Optional[str]:
        for cls in node_type.__mro__:
            handler_name = self._NODE_HANDLERS.get(cls)
            if handler_name is not None:
                return handler_name
        return None

    def _render_flattened(self, node: DocumentNode, context: RenderContext, output: list[RenderItem]) -> None:
        logger.debug("%s nested %d levels deep, emitting its text as one run", type(node).__name__, self.max_depth)
        if getattr(node, "is_block", False):
            output.append(self._block_break(BlockKind.EMPTY, context))
        text = _subtree_text(node)
        if text:
            output.append(self._run(text, context))

    @staticmethod
    def _block_break(kind: BlockKind, context: RenderContext, **kwargs: object) -> BlockBreak:
        return BlockBreak(
            kind=kind,
            depth=context.list_depth,
            indent=context.indent_level,
            alignment=context.style.alignment,
            **kwargs,  # type: ignore[arg-type]
        )

    @staticmethod
    def _run(text: str, context: RenderContext) -> StyledRun:
        style = context.style
        return StyledRun(
            text=text,
            style=style,
            font_size=context.effective_font_size,
            font_design=FontDesign.MONOSPACED if style.code else context.font_design,
            foreground=style.color if style.color is not None else context.text_color,
            link=context.link_url,
        )

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def _render_paragraph(self, node: Paragraph, context: RenderContext, output: list[RenderItem]) -> None:
        if node.alignment is not None:
            context = context.merging_style(TextStyle(alignment=node.alignment))
        output.append(self._block_break(BlockKind.PARAGRAPH, context))
        self._render_nodes(node.children, context, output)

    def _render_heading(self, node: Heading, context: RenderContext, output: list[RenderItem]) -> None:
        context = replace(context, heading_level=node.level)
        output.append(self._block_break(BlockKind.HEADING, context, level=node.level))
        self._render_nodes(node.children, context, output)

    def _render_blockquote(self, node: Blockquote, context: RenderContext, output: list[RenderItem]) -> None:
        context = replace(context, indent_level=context.indent_level + 1)
        output.append(self._block_break(BlockKind.BLOCKQUOTE, context))
        self._render_nodes(node.children, context, output)

    def _render_code_block(self, node: CodeBlock, context: RenderContext, output: list[RenderItem]) -> None:
        output.append(self._block_break(BlockKind.CODE_BLOCK, context, language=node.language))
        if node.code:
            output.append(self._run(node.code, context.merging_style(_CODE_STYLE)))

    def _render_preformatted(self, node: Preformatted, context: RenderContext, output: list[RenderItem]) -> None:
        output.append(self._block_break(BlockKind.PREFORMATTED, context))
        if node.text:
            output.append(self._run(node.text, context.merging_style(_CODE_STYLE)))

    def _render_horizontal_rule(self, node: HorizontalRule, context: RenderContext, output: list[RenderItem]) -> None:
        output.append(self._block_break(BlockKind.HORIZONTAL_RULE, context))

    def _render_list(self, node: List, context: RenderContext, output: list[RenderItem]) -> None:
        """Render a list, numbering its items from 1.

        Each item advances the counter of this list level exactly once; the
        advanced context is carried on to the next item only.
        """
        item_context = context.incrementing_list_depth()
        output.append(self._block_break(BlockKind.LIST, item_context))
        for item in node.items:
            item_context = item_context.incrementing_counter()
            label = item_context.list_label(node.ordered)
            output.append(self._block_break(BlockKind.LIST_ITEM, item_context, label=label))
            self._render_nodes(item, item_context, output)

    def _render_list_item(self, node: ListItem, context: RenderContext, output: list[RenderItem]) -> None:
        context = context.incrementing_counter()
        label = context.list_label(ordered=False)
        output.append(self._block_break(BlockKind.LIST_ITEM, context, label=label))
        self._render_nodes(node.children, context, output)

    def _render_div(self, node: Div, context: RenderContext, output: list[RenderItem]) -> None:
        delta = TextStyle(
            alignment=TextAlignment.from_html(node.attributes.get("align")),
            rtl=node.attributes.get("dir", "").lower() == "rtl",
        )
        context = context.merging_style(delta)
        output.append(self._block_break(BlockKind.DIV, context))
        self._render_nodes(node.children, context, output)

    def _render_details(self, node: Details, context: RenderContext, output: list[RenderItem]) -> None:
        output.append(self._block_break(BlockKind.DETAILS_SUMMARY, context))
        self._render_nodes(node.summary, context, output)

        body_context = replace(context, indent_level=context.indent_level + 1)
        output.append(self._block_break(BlockKind.DETAILS_BODY, body_context))
        self._render_nodes(node.body, body_context, output)

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def _render_text(self, node: Text, context: RenderContext, output: list[RenderItem]) -> None:
        if node.text:
            output.append(self._run(node.text, context))

    def _render_formatted(self, node: Formatted, context: RenderContext, output: list[RenderItem]) -> None:
        context = context.merging_style(node.style)
        if node.color_class:
            context = self._with_class_color(context, node.color_class)
        self._render_nodes(node.children, context, output)

    def _render_span(self, node: Span, context: RenderContext, output: list[RenderItem]) -> None:
        if node.class_name:
            context = self._with_class_color(context, node.class_name)
        self._render_nodes(node.children, context, output)

    def _render_link(self, node: Link, context: RenderContext, output: list[RenderItem]) -> None:
        context = replace(context.merging_style(_LINK_STYLE), link_url=node.url or None)
        self._render_nodes(node.children, context, output)

    def _render_line_break(self, node: LineBreak, context: RenderContext, output: list[RenderItem]) -> None:
        output.append(self._run("\n", context))

    @staticmethod
    def _with_class_color(context: RenderContext, class_name: str) -> RenderContext:
        color = resolve_color(class_name, context.work_skin)
        return context.with_style(context.style.with_color(color))


def _subtree_text(node: DocumentNode) -> str:
    """Concatenate the text under ``node`` with an explicit stack."""
    parts: list[str] = []
    stack: list[DocumentNode] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, Text):
            parts.append(current.text)
        elif isinstance(current, LineBreak):
            parts.append("\n")
        elif isinstance(current, CodeBlock):
            parts.append(current.code)
        elif isinstance(current, Preformatted):
            parts.append(current.text)
        elif isinstance(current, List):
            stack.extend(reversed([child for item in current.items for child in item]))
        elif isinstance(current, Details):
            stack.extend(reversed(current.summary + current.body))
        else:
            stack.extend(reversed(getattr(current, "children", ())))
    return "".join(parts)


def render(nodes: Iterable[DocumentNode], context: Optional[RenderContext] = None) -> list[RenderItem]:
    """Render document nodes with a shared :class:`DocumentRenderer`.

    Parameters
    ----------
    nodes : iterable of DocumentNode
        Top-level nodes of a chapter
    context : RenderContext or None, default None
        Initial context

    Returns
    -------
    list of StyledRun or BlockBreak
        Output in document order

    """
    return _DEFAULT_RENDERER.render(nodes, context)


_DEFAULT_RENDERER = DocumentRenderer()
