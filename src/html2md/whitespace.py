#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2md/whitespace.py
"""Flanking whitespace detection for inline elements.

Inline rules receive trimmed content, so whitespace at the edges of an
inline element would be lost (``a<b> word </b>c`` would become
``a**word**c``). The analyzer decides which single spaces must be put back
outside the rendered element, and skips a side when the neighbouring
sibling already supplies the space.

"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

from html2md.node import Node, NodeKind

_LEADING_WHITESPACE = re.compile(r"^[ \r\n\t]")
_TRAILING_WHITESPACE = re.compile(r"[ \r\n\t]$")
_ENDS_WITH_SPACE = re.compile(r" $")
_STARTS_WITH_SPACE = re.compile(r"^ ")


@dataclass(frozen=True)
class FlankingWhitespace:
    """Spaces to emit before and after an inline element's replacement."""

    leading: str = ""
    trailing: str = ""

    def __bool__(self) -> bool:
        return bool(self.leading or self.trailing)

    def wrap(self, replacement: str) -> str:
        return f"{self.leading}{replacement}{self.trailing}"


def is_flanked_by_whitespace(node: Node, side: Literal["left", "right"]) -> bool:
    """Return True when the sibling on ``side`` already provides a space next to ``node``.

    Text siblings are checked for a literal space at the touching edge,
    inline element siblings for a space at the edge of their inner markup.
    Block siblings and missing siblings never flank.
    """
    if side == "left":
        sibling = node.previous_sibling
        pattern = _ENDS_WITH_SPACE
    else:
        sibling = node.next_sibling
        pattern = _STARTS_WITH_SPACE

    if sibling is None:
        return False
    if sibling.kind is NodeKind.TEXT:
        return pattern.search(sibling.text_content) is not None
    if sibling.kind is NodeKind.ELEMENT and not sibling.is_block:
        return pattern.search(sibling.inner_html) is not None
    return False


def flanking_whitespace(node: Node) -> FlankingWhitespace:
    """Compute the flanking whitespace for ``node``.

    Parameters
    ----------
    node : Node
        Element being rendered

    Returns
    -------
    FlankingWhitespace
        Empty for block elements; otherwise a single space on each side whose
        whitespace was not already supplied by the neighbouring sibling

    """
    if node.is_block:
        return FlankingWhitespace()

    text = node.text_content
    leading = ""
    trailing = ""
    if _LEADING_WHITESPACE.search(text) and not is_flanked_by_whitespace(node, "left"):
        leading = " "
    if _TRAILING_WHITESPACE.search(text) and not is_flanked_by_whitespace(node, "right"):
        trailing = " "
    # A whitespace-only element stands for a single space
    if leading and trailing and not text.strip():
        trailing = ""
    return FlankingWhitespace(leading=leading, trailing=trailing)
