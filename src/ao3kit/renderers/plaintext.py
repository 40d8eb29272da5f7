#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ao3kit/renderers/plaintext.py
"""Plain text rendering of styled runs.

This module provides the PlainTextRenderer class, a reference host for the
output of :func:`ao3kit.document.render`. It lays block breaks out as lines
and blank lines and writes each styled run as text, optionally wrapped in
ANSI SGR escape sequences so bold, italic, underline, strikethrough and
resolved colors survive in a terminal.

"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from ao3kit.document.render import BlockBreak, BlockKind, RenderItem, StyledRun
from ao3kit.options.plaintext import PlainTextOptions

_ANSI_RESET = "\x1b[0m"

# Breaks that only start a new line instead of a new paragraph
_LINE_BREAK_KINDS = frozenset({BlockKind.LIST_ITEM, BlockKind.EMPTY})


class PlainTextRenderer:
    """Render a styled run stream to plain or ANSI-colored text.

    Parameters
    ----------
    options : PlainTextOptions or None, default = None
        Plain text rendering options

    Examples
    --------
    Basic usage:

        >>> from ao3kit.document import parse_chapter_html, render
        >>> items = render(parse_chapter_html("<p>One</p><ol><li>a</li><li>b</li></ol>"))
        >>> print(PlainTextRenderer().render_to_string(items))
        One
        <BLANKLINE>
        1. a
        2. b

    """

    def __init__(self, options: Optional[PlainTextOptions] = None):
        """Initialize the plain text renderer with options."""
        if options is not None and not isinstance(options, PlainTextOptions):
            raise TypeError(f"Expected PlainTextOptions, got {type(options).__name__}")
        self.options: PlainTextOptions = options or PlainTextOptions()
        self._output: list[str] = []
        self._pending_separator: Optional[str] = None
        self._line_prefix = ""
        self._continuation_prefix = ""
        self._item_label_pending = False
        self._item_depth = 0
        self._in_heading = False

    def render_to_string(self, items: Iterable[RenderItem]) -> str:
        """Render styled runs and block breaks to a string.

        Parameters
        ----------
        items : iterable of StyledRun or BlockBreak
            Output of the render walk, in document order

        Returns
        -------
        str
            Rendered text without trailing whitespace

        """
        self._reset()
        for item in items:
            if isinstance(item, BlockBreak):
                self._visit_block_break(item)
            elif isinstance(item, StyledRun):
                self._visit_run(item)

        return "".join(self._output).rstrip()

    def _reset(self) -> None:
        self._output = []
        self._pending_separator = None
        self._line_prefix = ""
        self._continuation_prefix = ""
        self._item_label_pending = False
        self._item_depth = 0
        self._in_heading = False

    def _visit_block_break(self, item: BlockBreak) -> None:
        """Record the layout a block break asks for.

        Separators are deferred until the next run is written, so nested
        blocks and blocks with no text collapse into a single separator.
        """
        self._in_heading = item.kind is BlockKind.HEADING
        quote_prefix = self.options.quote_prefix * item.indent

        if item.kind is BlockKind.LIST_ITEM:
            nesting = self.options.list_indent * max(item.depth - 1, 0)
            marker = f"{item.label} " if item.label else ""
            self._request_separator("\n")
            self._line_prefix = f"{quote_prefix}{nesting}{marker}"
            self._continuation_prefix = f"{quote_prefix}{nesting}{' ' * len(marker)}"
            self._item_label_pending = True
            self._item_depth = item.depth
            return

        if item.kind is BlockKind.HORIZONTAL_RULE:
            self._request_separator(self.options.paragraph_separator)
            self._line_prefix = quote_prefix
            self._continuation_prefix = quote_prefix
            self._write(self.options.rule_text)
            self._request_separator(self.options.paragraph_separator)
            return

        if self._item_label_pending and item.depth >= self._item_depth:
            # Block content opening a list item stays on the label's line
            return

        if item.kind in _LINE_BREAK_KINDS or (item.kind is BlockKind.LIST and item.depth > 1):
            self._request_separator("\n")
        else:
            self._request_separator(self.options.paragraph_separator)
        self._line_prefix = quote_prefix
        self._continuation_prefix = quote_prefix

    def _visit_run(self, run: StyledRun) -> None:
        text = run.text.upper() if self._in_heading and self.options.uppercase_headings else run.text
        self._write(self._styled(text, run))

    def _request_separator(self, separator: str) -> None:
        if self._pending_separator is None or len(separator) > len(self._pending_separator):
            self._pending_separator = separator

    def _write(self, text: str) -> None:
        if self._pending_separator is not None:
            if self._output:
                self._output.append(self._pending_separator)
            self._output.append(self._line_prefix)
            self._pending_separator = None
            self._item_label_pending = False

        if "\n" in text:
            text = text.replace("\n", "\n" + self._continuation_prefix)
        self._output.append(text)

    def _styled(self, text: str, run: StyledRun) -> str:
        """Wrap ``text`` in the SGR codes for the run's style when ANSI is enabled."""
        if not self.options.use_ansi:
            return text

        style = run.style
        codes = []
        if style.bold:
            codes.append("1")
        if style.italic:
            codes.append("3")
        if style.underline:
            codes.append("4")
        if style.strikethrough:
            codes.append("9")
        if style.color is not None:
            red, green, blue = style.color.to_rgb255()
            codes.append(f"38;2;{red};{green};{blue}")

        if not codes:
            return text
        return f"\x1b[{';'.join(codes)}m{text}{_ANSI_RESET}"
