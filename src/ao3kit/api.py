"""The major exported API functions for chapter rendering."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/ao3kit/api.py
import logging
from dataclasses import replace
from typing import Optional

from ao3kit.document.builder import parse_chapter_html
from ao3kit.document.render import RenderContext, RenderItem, render
from ao3kit.document.skin import WorkSkin
from ao3kit.options.html import HtmlParserOptions
from ao3kit.options.plaintext import PlainTextOptions
from ao3kit.renderers.plaintext import PlainTextRenderer

logger = logging.getLogger(__name__)


def render_chapter(
    html: str,
    work_skin_css: Optional[str] = None,
    context: Optional[RenderContext] = None,
    parser_options: Optional[HtmlParserOptions] = None,
) -> list[RenderItem]:
    """Convert a chapter body to styled runs and block breaks in one call.

    Parameters
    ----------
    html : str
        Chapter body HTML
    work_skin_css : str or None, default None
        Contents of the work's skin ``<style>`` block. When given, its class
        colors replace the skin of ``context``
    context : RenderContext or None, default None
        Initial render context carrying the host defaults
    parser_options : HtmlParserOptions or None, default None
        Options for the HTML to document tree conversion

    Returns
    -------
    list of StyledRun or BlockBreak
        Rendered output in document order

    Examples
    --------
    >>> items = render_chapter(
    ...     '<p><span class="Fog">hi</span></p>',
    ...     work_skin_css="#workskin .Fog { color: #fc4e47; }",
    ... )
    >>> items[1].foreground.to_hex()
    'fc4e47'

    """
    context = context or RenderContext()
    if work_skin_css is not None:
        context = replace(context, work_skin=WorkSkin.from_css(work_skin_css))

    nodes = parse_chapter_html(html, parser_options)
    logger.debug("Rendering %d top-level node(s) with %d skin color(s)", len(nodes), len(context.work_skin))
    return render(nodes, context)


def render_chapter_text(
    html: str,
    work_skin_css: Optional[str] = None,
    options: Optional[PlainTextOptions] = None,
    parser_options: Optional[HtmlParserOptions] = None,
) -> str:
    """Render a chapter body to plain (or ANSI-styled) text.

    Parameters
    ----------
    html : str
        Chapter body HTML
    work_skin_css : str or None, default None
        Contents of the work's skin ``<style>`` block
    options : PlainTextOptions or None, default None
        Plain text rendering options
    parser_options : HtmlParserOptions or None, default None
        Options for the HTML to document tree conversion

    Returns
    -------
    str
        Rendered text

    """
    items = render_chapter(html, work_skin_css=work_skin_css, parser_options=parser_options)
    return PlainTextRenderer(options).render_to_string(items)
