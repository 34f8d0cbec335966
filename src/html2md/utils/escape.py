#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2md/utils/escape.py
"""Markdown escaping for text extracted from HTML.

Text nodes are escaped so that characters which would otherwise be read as
markdown syntax (headings, list markers, emphasis, code spans, links)
survive as literal text. Escaping runs as a fixed sequence of passes over
the whole string; a backslash inserted by one pass is never re-escaped by a
later one because existing backslash escapes are handled first.

"""

from __future__ import annotations

import re
from typing import Callable, Pattern

from html2md.constants import ESCAPE_GUARD_SCHEMES

_BACKSLASH_ESCAPE = re.compile(r"\\(\S)")
_ATX_HEADING = re.compile(r"^(#{1,6} )", re.MULTILINE)
_THEMATIC_BREAK = re.compile(r"^([-*_] *){3,}$", re.MULTILINE)
_THEMATIC_BREAK_MARKER = re.compile(r"([-*_])")
_ORDERED_LIST = re.compile(r"^(\W* {0,3})(\d+)\. ", re.MULTILINE)
_UNORDERED_LIST = re.compile(r"^([^\\\w]*)[*+-] ", re.MULTILINE)
_UNORDERED_LIST_MARKER = re.compile(r"([*+-])")
_BLOCKQUOTE = re.compile(r"^(\W* {0,3})> ", re.MULTILINE)

# A delimiter is live unless an odd number of backslashes precedes it, so
# each span may begin with a run of backslash pairs. No whitespace is
# allowed just inside emphasis delimiters.
_STAR_EMPHASIS = re.compile(r"(?<!\\)(?:\\\\)*\*+(?!\s)(?:[^*]*[^\s*\\](?:\\\\)*|(?:\\\\)+)\*+")
_UNDERSCORE_EMPHASIS = re.compile(r"(?<!\\)(?:\\\\)*_+(?!\s)(?:[^_]*[^\s_\\](?:\\\\)*|(?:\\\\)+)_+")
_CODE_SPAN = re.compile(r"(?<!\\)(?:\\\\)*`+(?:[^`]*[^`\\](?:\\\\)*|(?:\\\\)+)`+")
_STRIKETHROUGH = re.compile(r"(?<!\\)(?:\\\\)*~+(?:[^~]*[^~\\](?:\\\\)*|(?:\\\\)+)~+")
_LINK_BRACKET = re.compile(r"[\[\]]")

_URL_SCHEME = re.compile("(?:" + "|".join(re.escape(scheme) for scheme in ESCAPE_GUARD_SCHEMES) + r")(?=.)", re.S)

_ALT_SPECIAL = re.compile(r"([\\\[\]])")
_DESTINATION_PARENS = re.compile(r"([()])")
_DESTINATION_ANGLES = re.compile(r"([<>])")


def _is_preceded_by_url(text: str, pos: int) -> bool:
    """Return True if a URL scheme plus at least one non-space char runs up to ``pos``."""
    start = pos
    while start > 0 and not text[start - 1].isspace():
        start -= 1
    return _URL_SCHEME.search(text[start:pos]) is not None


def _sub_outside_urls(pattern: Pattern[str], replace: Callable[[str], str], text: str) -> str:
    """Substitute every match of ``pattern`` that is not part of a URL.

    A match rejected by the URL guard consumes nothing, so scanning resumes
    one character after its start.
    """
    parts: list[str] = []
    last_end = 0
    search_at = 0
    while search_at <= len(text):
        match = pattern.search(text, search_at)
        if match is None:
            break
        if _is_preceded_by_url(text, match.start()):
            search_at = match.start() + 1
            continue
        parts.append(text[last_end : match.start()])
        parts.append(replace(match.group(0)))
        last_end = search_at = match.end()
    parts.append(text[last_end:])
    return "".join(parts)


def _escape_each(char: str) -> Callable[[str], str]:
    return lambda span: span.replace(char, "\\" + char)


def escape(text: str) -> str:
    r"""Escape markdown special characters so ``text`` renders literally.

    Parameters
    ----------
    text : str
        Raw text, typically the content of an HTML text node

    Returns
    -------
    str
        Markdown-safe text

    Examples
    --------
        >>> escape("# Heading")
        '\\# Heading'
        >>> escape("1. first")
        '1\\. first'
        >>> escape("*bold*")
        '\\*bold\\*'
        >>> escape("visit http://x.com/*bold*")
        'visit http://x.com/*bold*'

    """
    if not text:
        return text

    text = _BACKSLASH_ESCAPE.sub(lambda m: "\\\\" + m.group(1), text)
    text = _ATX_HEADING.sub(lambda m: "\\" + m.group(1), text)
    text = _THEMATIC_BREAK.sub(lambda m: _THEMATIC_BREAK_MARKER.sub(r"\\\1", m.group(0)), text)
    text = _ORDERED_LIST.sub(lambda m: f"{m.group(1)}{m.group(2)}\\. ", text)
    text = _UNORDERED_LIST.sub(lambda m: _UNORDERED_LIST_MARKER.sub(r"\\\1", m.group(0)), text)
    text = _BLOCKQUOTE.sub(lambda m: f"{m.group(1)}\\> ", text)

    text = _sub_outside_urls(_STAR_EMPHASIS, _escape_each("*"), text)
    text = _sub_outside_urls(_UNDERSCORE_EMPHASIS, _escape_each("_"), text)
    text = _sub_outside_urls(_CODE_SPAN, _escape_each("`"), text)
    text = _sub_outside_urls(_STRIKETHROUGH, _escape_each("~"), text)
    text = _sub_outside_urls(_LINK_BRACKET, lambda bracket: "\\" + bracket, text)
    return text


def escape_image_alt(alt: str) -> str:
    """Escape backslashes and square brackets so ``alt`` cannot close the image text early."""
    return _ALT_SPECIAL.sub(r"\\\1", alt)


def escape_link_destination(url: str) -> str:
    r"""Format ``url`` for the ``(...)`` slot of a link or image.

    URLs containing whitespace are wrapped in angle brackets; otherwise
    parentheses are backslash-escaped.

    Examples
    --------
        >>> escape_link_destination("a(1).png")
        'a\\(1\\).png'
        >>> escape_link_destination("a b.png")
        '<a b.png>'

    """
    if any(char.isspace() for char in url):
        return "<" + _DESTINATION_ANGLES.sub(r"\\\1", url) + ">"
    return _DESTINATION_PARENS.sub(r"\\\1", url)


def escape_link_title(title: str) -> str:
    """Escape double quotes in a link title written as ``"title"``."""
    return title.replace('"', '\\"')
