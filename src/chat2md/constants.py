#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for chat2md.

This module centralizes the hardcoded values used across the serializer,
the HTML adapter and the conversation exporter.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Markdown Formatting - Markup emitted by the serializer
3. Serializer Behaviour - Defaults for ``SerializerOptions``
4. Conversation Export - Selectors and defaults for ``ExportOptions``
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

Role = Literal["user", "agent"]
HtmlParser = Literal["html.parser", "lxml", "html5lib"]

# =============================================================================
# Markdown Formatting
# =============================================================================

CODE_FENCE = "```"
BULLET_MARKER = "-"
BLOCKQUOTE_PREFIX = "> "
HORIZONTAL_RULE = "---"
TABLE_SEPARATOR_CELL = "---"

# Headings are bumped by one level so that level 1 stays free for role headers
HEADING_LEVEL_OFFSET = 1
MAX_HEADING_LEVEL = 6

# Characters escaped inside text nodes when escaping is enabled
MARKDOWN_SPECIAL_CHARS = r"\`*_{}[]#|"

# =============================================================================
# Serializer Behaviour
# =============================================================================

DEFAULT_ESCAPE_SPECIAL = False
DEFAULT_FLATTEN_LIST_ITEMS = True
DEFAULT_MAX_DEPTH = 200

LANGUAGE_CLASS_PREFIX = "language-"

# =============================================================================
# Conversation Export
# =============================================================================

DEFAULT_HTML_PARSER: HtmlParser = "html.parser"
DEFAULT_PREAMBLE = "agent: ChatGPT"
DEFAULT_FILENAME_PREFIX = "ChatGPT"
FILENAME_TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"
MARKDOWN_EXTENSION = ".md"

TURN_TESTID_PREFIX = "conversation-turn-"
AUTHOR_ROLE_ATTRIBUTE = "data-message-author-role"
USER_AUTHOR_ROLE = "user"
ASSISTANT_AUTHOR_ROLE = "assistant"
USER_TEXT_CLASS = "whitespace-pre-wrap"
ASSISTANT_MARKDOWN_CLASS = "markdown"

# Elements whose contents are never part of the visible document
STRIPPED_HTML_TAGS = frozenset({"script", "style", "template", "noscript"})

# =============================================================================
# Configuration Discovery
# =============================================================================

ENV_PREFIX = "CHAT2MD_"
CONFIG_ENV_VAR = "CHAT2MD_CONFIG"
CONFIG_FILENAMES = (".chat2md.toml", ".chat2md.yaml", ".chat2md.yml", ".chat2md.json")
PYPROJECT_TOOL_SECTION = "chat2md"
