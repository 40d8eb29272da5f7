#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/ao3kit/renderers/__init__.py
"""Host renderers for styled run streams.

Available renderers:
- PlainTextRenderer: Render to plain text, optionally with ANSI styling

"""

from ao3kit.renderers.plaintext import PlainTextRenderer

__all__ = ["PlainTextRenderer"]
