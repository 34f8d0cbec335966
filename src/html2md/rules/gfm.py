#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2md/rules/gfm.py
"""GitHub Flavored Markdown extensions: strikethrough and pipe tables."""

from __future__ import annotations

import re

from html2md.node import Node
from html2md.options.style import StyleOptions
from html2md.rules.base import Rule
from html2md.utils.escape import escape

_CELL_LINE_BREAKS = re.compile(r"[ \t]*\n+[ \t]*")
_TABLE_PREAMBLE = ("caption", "colgroup")
_ALIGNMENT_BORDERS = {
    "left": ":--",
    "right": "--:",
    "center": ":-:",
}


def _cell(content: str, node: Node) -> str:
    content = _CELL_LINE_BREAKS.sub(" ", content.strip()).replace("|", "\\|")
    prefix = "| " if node.element_index == 0 else " "
    return f"{prefix}{content} |"


def _is_first_tbody(node: Node) -> bool:
    if node.name != "tbody":
        return False
    sibling = node.previous_element_sibling
    while sibling is not None and sibling.name in _TABLE_PREAMBLE:
        sibling = sibling.previous_element_sibling
    return sibling is None


def is_heading_row(row: Node) -> bool:
    """Return True for a ``<tr>`` that forms the table header."""
    parent = row.parent
    if parent is None:
        return False
    if parent.name == "thead":
        return True
    return (
        parent.find_child("tr") == row
        and (parent.name == "table" or _is_first_tbody(parent))
        and all(cell.name == "th" for cell in row.element_children())
    )


def _row(content: str, node: Node) -> str:
    border_cells = ""
    if is_heading_row(node):
        for cell in node.element_children():
            align = (cell.get_attribute("align") or "").lower()
            border_cells += _cell(_ALIGNMENT_BORDERS.get(align, "---"), cell)
    return f"\n{content}" + (f"\n{border_cells}" if border_cells else "")


def _table(content: str, node: Node) -> str:
    body = content.replace("\n\n", "\n").strip("\n")

    first_row = node.find("tr")
    if first_row is not None and not is_heading_row(first_row):
        columns = len(first_row.element_children())
        header = "|" + " |" * columns
        separator = "|" + " --- |" * columns
        body = f"{header}\n{separator}\n{body}"

    caption = node.find("caption")
    if caption is not None and caption.text_content.strip():
        body = f"{escape(caption.text_content.strip())}\n\n{body}"
    return f"\n\n{body}\n\n"


def _section(content: str, node: Node) -> str:
    return content


def _strikethrough(content: str, node: Node) -> str:
    if not content.strip():
        return ""
    return f"~~{content}~~"


def gfm_rules(style: StyleOptions) -> list[Rule]:
    """Build the GFM extension rules for one conversion."""
    return [
        Rule(name="strikethrough", filter=("del", "s", "strike"), replacement=_strikethrough),
        Rule(name="tableCaption", filter="caption", replacement=lambda content, node: ""),
        Rule(name="tableCell", filter=("th", "td"), replacement=_cell),
        Rule(name="tableRow", filter="tr", replacement=_row),
        Rule(name="tableSection", filter=("thead", "tbody", "tfoot"), replacement=_section),
        Rule(name="table", filter="table", replacement=_table),
    ]
