"""html2md - Convert HTML into Markdown.

html2md walks an HTML document once and renders every element with a
formatting rule. The built-in rule table covers CommonMark plus the GitHub
Flavored Markdown strikethrough and table extensions; callers can add their
own rules, drop whole elements, and choose between output style variants.

Key Features
------------
- Context-aware escaping of markdown metacharacters in text
- Inline whitespace preserved around formatted spans
- Newline reconciliation between adjacent blocks
- Inline or reference-style links, with reference definitions emitted once
- Relative image sources rebased onto a configurable base URL
- No state shared between conversions

Requirements
------------
- Python 3.10+
- beautifulsoup4

Examples
--------
Basic usage:

    >>> from html2md import convert
    >>> convert("<h2>Intro</h2><p>Hello <em>world</em></p>")
    'Intro\\n-----\\n\\nHello _world_'

Custom rules run before the built-in ones:

    >>> from html2md import Rule
    >>> mark = Rule(name="mark", filter="mark", replacement=lambda content, node: f"=={content}==")
    >>> convert("<p><mark>hot</mark></p>", rules=[mark])
    '==hot=='

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "html2md requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from html2md.converter import ConversionContext, MarkdownConverter, convert
from html2md.exceptions import (
    DependencyError,
    Html2MdError,
    ParsingError,
    RenderingError,
    RuleResolutionError,
    ValidationError,
)
from html2md.node import Node, NodeKind
from html2md.options.style import StyleOptions
from html2md.rules import AppendingRule, Rule, RuleSet, build_rule_set
from html2md.utils.escape import escape

__all__ = [
    "__version__",
    "convert",
    "escape",
    "MarkdownConverter",
    "ConversionContext",
    "StyleOptions",
    "Rule",
    "AppendingRule",
    "RuleSet",
    "build_rule_set",
    "Node",
    "NodeKind",
    "Html2MdError",
    "ValidationError",
    "ParsingError",
    "RenderingError",
    "RuleResolutionError",
    "DependencyError",
]
