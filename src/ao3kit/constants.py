#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the ao3kit library.

This module centralizes hardcoded values and default configuration
constants used across ao3kit.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Presentation Defaults - Host defaults used to seed style resolution
3. HTML Parsing - Chapter body conversion settings
4. Network - Archive endpoints and page markers
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

HtmlParser = Literal["html.parser", "html5lib", "lxml"]

# =============================================================================
# Presentation Defaults
# =============================================================================

DEFAULT_FONT_SIZE = 17.0

# Relative size multipliers for heading levels 1-6
HEADING_SIZE_MULTIPLIERS: dict[int, float] = {
    1: 2.0,
    2: 1.65,
    3: 1.35,
    4: 1.18,
    5: 1.06,
    6: 0.94,
}

# Unordered list glyphs, cycled by nesting depth
UNORDERED_LIST_BULLETS = ("•", "◦", "▪")

# RGB channels (0-1) applied to link text
DEFAULT_LINK_COLOR = (0.0, 0.478, 1.0)

DEFAULT_TEXT_COLOR = (0.0, 0.0, 0.0)
DEFAULT_BACKGROUND_COLOR = (1.0, 1.0, 1.0)

DEFAULT_RULE_TEXT = "─" * 5

# =============================================================================
# HTML Parsing
# =============================================================================

DEFAULT_HTML_PARSER: HtmlParser = "html.parser"
DEFAULT_DETAILS_SUMMARY = "Details"
DEFAULT_IMAGE_ALT_TEXT = "Image"

# Element nesting beyond which a subtree is flattened to its text
DEFAULT_MAX_NESTING_DEPTH = 100

# Tags whose content is never text of the chapter
DROPPED_HTML_ELEMENTS = frozenset({"script", "style", "template", "noscript"})

# =============================================================================
# Network
# =============================================================================

AO3_BASE_URL = "https://archiveofourown.org"
DEFAULT_USER_AGENT = "ao3kit-fetcher/1.0"
DEFAULT_REQUEST_TIMEOUT = 30.0
MAX_ADULT_CONTENT_REDIRECTS = 9

ADULT_CONTENT_MARKER = "this work could have adult content"
REGISTERED_USERS_ONLY_MARKER = "this work is only available to registered users"
VIEW_ADULT_PARAMETER = "view_adult=true"

USER_AGENT_ENV_VAR = "AO3KIT_USER_AGENT"
