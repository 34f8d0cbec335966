#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for html2md.

Constants are organized by category:
1. Type Definitions - Literal types for style options
2. Style Defaults - Default markdown output style
3. HTML Element Classes - Block, void and code-context elements
4. Dependencies - Package requirements checked at runtime
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

HeadingStyle = Literal["setext", "atx"]
HorizontalRule = Literal["* * *", "- - -", "_ _ _"]
BulletListMarker = Literal["*", "-", "_"]
CodeBlockStyle = Literal["indented", "fenced"]
CodeFence = Literal["```", "~~~"]
EmDelimiter = Literal["_", "*"]
StrongDelimiter = Literal["**", "__"]
LinkStyle = Literal["inlined", "referenced"]
LinkReferenceStyle = Literal["full", "collapsed", "shortcut"]

# =============================================================================
# Style Defaults
# =============================================================================

DEFAULT_HEADING_STYLE: HeadingStyle = "setext"
DEFAULT_HR: HorizontalRule = "* * *"
DEFAULT_BULLET_LIST_MARKER: BulletListMarker = "*"
DEFAULT_CODE_BLOCK_STYLE: CodeBlockStyle = "indented"
DEFAULT_FENCE: CodeFence = "```"
DEFAULT_EM_DELIMITER: EmDelimiter = "_"
DEFAULT_STRONG_DELIMITER: StrongDelimiter = "**"
DEFAULT_LINK_STYLE: LinkStyle = "inlined"
DEFAULT_LINK_REFERENCE_STYLE: LinkReferenceStyle = "full"

HEADING_STYLES = ("setext", "atx")
HORIZONTAL_RULES = ("* * *", "- - -", "_ _ _")
BULLET_LIST_MARKERS = ("*", "-", "_")
CODE_BLOCK_STYLES = ("indented", "fenced")
CODE_FENCES = ("```", "~~~")
EM_DELIMITERS = ("_", "*")
STRONG_DELIMITERS = ("**", "__")
LINK_STYLES = ("inlined", "referenced")
LINK_REFERENCE_STYLES = ("full", "collapsed", "shortcut")

# Style option keys as accepted from callers that use the camelCase names
STYLE_OPTION_ALIASES = {
    "headingStyle": "heading_style",
    "hr": "hr",
    "bulletListMarker": "bullet_list_marker",
    "codeBlockStyle": "code_block_style",
    "fence": "fence",
    "emDelimiter": "em_delimiter",
    "strongDelimiter": "strong_delimiter",
    "linkStyle": "link_style",
    "linkReferenceStyle": "link_reference_style",
}

# =============================================================================
# HTML Element Classes
# =============================================================================

BLOCK_ELEMENTS = frozenset(
    {
        "address",
        "article",
        "aside",
        "audio",
        "blockquote",
        "body",
        "canvas",
        "center",
        "dd",
        "dir",
        "div",
        "dl",
        "dt",
        "fieldset",
        "figcaption",
        "figure",
        "footer",
        "form",
        "frameset",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "hgroup",
        "hr",
        "html",
        "isindex",
        "li",
        "main",
        "menu",
        "nav",
        "noframes",
        "noscript",
        "ol",
        "output",
        "p",
        "pre",
        "section",
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

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "command",
        "embed",
        "hr",
        "img",
        "input",
        "keygen",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Elements that still produce output when they contain no text
MEANINGFUL_WHEN_BLANK_ELEMENTS = frozenset(
    {"a", "table", "thead", "tbody", "tfoot", "th", "td", "iframe", "script", "audio", "video"}
)

CODE_CONTEXT_ELEMENTS = frozenset({"code"})

PREFORMATTED_ELEMENTS = frozenset({"pre"})

DEFAULT_REMOVED_ELEMENTS = ("script", "style", "template")

# URL schemes whose trailing run suppresses inline escaping
ESCAPE_GUARD_SCHEMES = ("https://", "http://", "mailto:", "tel:")

DEFAULT_HTML_PARSER = "html.parser"

# =============================================================================
# Dependencies
# =============================================================================

# (install_name, import_name, version_spec)
DEPS_HTML = [("beautifulsoup4", "bs4", ">=4.12.0")]
