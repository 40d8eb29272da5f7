#  Copyright (c) 2025 Tom Villani, Ph.D.
# ao3kit/options/plaintext.py
"""Configuration options for the plain text host renderer."""

from dataclasses import dataclass, field

from ao3kit.constants import DEFAULT_RULE_TEXT
from ao3kit.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class PlainTextOptions(CloneFrozenMixin):
    r"""Configuration options for plain text rendering of styled runs.

    Parameters
    ----------
    use_ansi : bool, default False
        Wrap runs in ANSI SGR escape sequences (bold, italic, underline,
        strikethrough and 24-bit foreground color).
    paragraph_separator : str, default "\n\n"
        Separator emitted before paragraph-like blocks.
    list_indent : str, default "  "
        Indentation added per nested list level.
    quote_prefix : str, default "> "
        Prefix added per blockquote / details body nesting level.
    rule_text : str, default "─────"
        Text used for horizontal rules.
    uppercase_headings : bool, default False
        Upper-case heading text.

    """

    use_ansi: bool = field(default=False, metadata={"help": "Emit ANSI color and style escape sequences"})
    paragraph_separator: str = field(default="\n\n", metadata={"help": "Separator between paragraphs"})
    list_indent: str = field(default="  ", metadata={"help": "Indentation per nested list level"})
    quote_prefix: str = field(default="> ", metadata={"help": "Prefix per blockquote level"})
    rule_text: str = field(default=DEFAULT_RULE_TEXT, metadata={"help": "Text used for horizontal rules"})
    uppercase_headings: bool = field(default=False, metadata={"help": "Upper-case heading text"})
