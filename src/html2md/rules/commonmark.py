#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2md/rules/commonmark.py
"""CommonMark rule table.

:func:`commonmark_rules` builds the rules for one conversion. Each rule is
a closure over the conversion's :class:`StyleOptions`; the reference link
rule also owns the link definitions collected during that conversion.

"""

from __future__ import annotations

import re

from html2md.node import Node
from html2md.options.style import StyleOptions
from html2md.rules.base import AppendingRule, Rule
from html2md.utils.escape import escape_image_alt, escape_link_destination, escape_link_title

_ATTRIBUTE_NEWLINES = re.compile(r"(\n+\s*)+")
_LANGUAGE_CLASS = re.compile(r"language-(\S+)")
_LINE_START = re.compile(r"^", re.MULTILINE)
_LINE_ENDINGS = re.compile(r"\r?\n|\r")
_BACKTICK_RUN = re.compile(r"`+")
_CODE_NEEDS_PADDING = re.compile(r"^`|^ .*?[^ ].* $|`$")
_HARD_BREAK_BEFORE_BLANK_LINE = re.compile(r"  (?=\n\n)")
_LINE_CONTINUATION = re.compile(r"\n(?!\n)")


def clean_attribute(value: str | None) -> str:
    """Collapse line breaks in an attribute value; None becomes an empty string."""
    return _ATTRIBUTE_NEWLINES.sub("\n", value) if value else ""


def _title_part(node: Node) -> str:
    title = clean_attribute(node.get_attribute("title"))
    return f' "{escape_link_title(title)}"' if title else ""


def _normalize_label(label: str) -> str:
    return " ".join(label.split()).casefold()


def _first_child_is_code(node: Node) -> bool:
    first = node.first_child
    return node.name == "pre" and first is not None and first.name == "code"


def _paragraph(content: str, node: Node) -> str:
    return f"\n\n{content}\n\n"


def _line_break(content: str, node: Node) -> str:
    return "  \n"


def _blockquote(content: str, node: Node) -> str:
    content = _LINE_START.sub("> ", content.strip("\n"))
    return f"\n\n{content}\n\n"


def _list(content: str, node: Node) -> str:
    parent = node.parent
    if parent is not None and parent.name == "li" and parent.last_element_child == node:
        return f"\n{content}"
    return f"\n\n{content}\n\n"


def _inline_code(content: str, node: Node) -> str:
    if not content:
        return ""
    content = _LINE_ENDINGS.sub(" ", content)
    padding = " " if _CODE_NEEDS_PADDING.search(content) else ""
    delimiter = "`"
    runs = set(_BACKTICK_RUN.findall(content))
    while delimiter in runs:
        delimiter += "`"
    return f"{delimiter}{padding}{content}{padding}{delimiter}"


def _is_inline_code(node: Node) -> bool:
    if node.name != "code":
        return False
    parent = node.parent
    is_code_block = (
        parent is not None and parent.name == "pre" and node.previous_sibling is None and node.next_sibling is None
    )
    return not is_code_block


def _image(content: str, node: Node) -> str:
    src = node.get_attribute("src") or ""
    if not src:
        return ""
    alt = escape_image_alt(clean_attribute(node.get_attribute("alt")))
    return f"![{alt}]({escape_link_destination(src)}{_title_part(node)})"


class ReferenceLinks:
    """Collects reference link definitions for one conversion.

    Definitions are kept in first-appearance order and emitted once each.
    Links sharing the same href and title share one numeric label. With the
    collapsed and shortcut styles the link text is the label; when that
    label already names a different target, the link gets a numeric label
    instead so every reference resolves to its own href.
    """

    def __init__(self, style: StyleOptions):
        self.style = style
        self._definitions: list[str] = []
        self._targets: dict[str, tuple[str, str]] = {}
        self._numbers: dict[tuple[str, str], str] = {}
        self._next_number = 1

    def _bind(self, label: str, target: tuple[str, str]) -> bool:
        """Bind ``label`` to ``target``; return False if it already names another target."""
        key = _normalize_label(label)
        bound = self._targets.get(key)
        if bound is None:
            self._targets[key] = target
            href, title = target
            self._definitions.append(f"[{label}]: {href}{title}")
            return True
        return bound == target

    def _numeric_label(self, target: tuple[str, str]) -> str:
        label = self._numbers.get(target)
        while label is None:
            candidate = str(self._next_number)
            self._next_number += 1
            if self._bind(candidate, target):
                label = self._numbers[target] = candidate
        return label

    def replacement(self, content: str, node: Node) -> str:
        target = (escape_link_destination(node.get_attribute("href") or ""), _title_part(node))
        reference_style = self.style.link_reference_style

        if reference_style != "full" and content.strip() and self._bind(content, target):
            return f"[{content}][]" if reference_style == "collapsed" else f"[{content}]"
        return f"[{content}][{self._numeric_label(target)}]"

    def append(self) -> str:
        if not self._definitions:
            return ""
        return "\n\n" + "\n".join(self._definitions) + "\n\n"


def commonmark_rules(style: StyleOptions) -> list[Rule]:
    """Build the CommonMark rules for one conversion.

    Parameters
    ----------
    style : StyleOptions
        Output style the rules format with

    Returns
    -------
    list[Rule]
        Rules in priority order

    """

    def heading(content: str, node: Node) -> str:
        level = int(node.name[1])
        if style.heading_style == "setext" and level < 3:
            underline = ("=" if level == 1 else "-") * len(content)
            return f"\n\n{content}\n{underline}\n\n"
        return f"\n\n{'#' * level} {content}\n\n"

    # Positions of the items of each ordered list, filled on first use
    item_positions: dict[Node, dict[Node, int]] = {}

    def item_position(item: Node, parent: Node) -> int:
        positions = item_positions.get(parent)
        if positions is None:
            positions = {child: i for i, child in enumerate(parent.element_children())}
            item_positions[parent] = positions
        return positions[item]

    def list_item(content: str, node: Node) -> str:
        content = content.lstrip("\n")
        is_loose = content.endswith("\n")
        content = _HARD_BREAK_BEFORE_BLANK_LINE.sub("", content.rstrip("\n"))
        # Blank lines inside the item stay empty
        content = _LINE_CONTINUATION.sub("\n    ", content)

        prefix = f"{style.bullet_list_marker}   "
        parent = node.parent
        if parent is not None and parent.name == "ol":
            index = item_position(node, parent)
            try:
                number = int(parent.get_attribute("start") or "") + index
            except ValueError:
                number = index + 1
            prefix = f"{number}.  "

        suffix = ""
        if node.next_sibling is not None:
            suffix = "\n\n" if is_loose else "\n"
        return f"{prefix}{content}{suffix}"

    def indented_code_block(content: str, node: Node) -> str:
        code = node.first_child.text_content
        if code.endswith("\n"):
            code = code[:-1]
        return "\n\n    " + code.replace("\n", "\n    ") + "\n\n"

    def fenced_code_block(content: str, node: Node) -> str:
        code_node = node.first_child
        match = _LANGUAGE_CLASS.search(code_node.get_attribute("class") or "")
        language = match.group(1) if match else ""
        code = code_node.text_content

        fence_char = style.fence[0]
        fence_size = 3
        for run in re.findall(rf"^{re.escape(fence_char)}{{3,}}", code, flags=re.MULTILINE):
            if len(run) >= fence_size:
                fence_size = len(run) + 1
        fence = fence_char * fence_size

        if code.endswith("\n"):
            code = code[:-1]
        return f"\n\n{fence}{language}\n{code}\n{fence}\n\n"

    def horizontal_rule(content: str, node: Node) -> str:
        return f"\n\n{style.hr}\n\n"

    def inline_link(content: str, node: Node) -> str:
        href = escape_link_destination(node.get_attribute("href") or "")
        return f"[{content}]({href}{_title_part(node)})"

    def emphasis(content: str, node: Node) -> str:
        if not content.strip():
            return ""
        return f"{style.em_delimiter}{content}{style.em_delimiter}"

    def strong(content: str, node: Node) -> str:
        if not content.strip():
            return ""
        return f"{style.strong_delimiter}{content}{style.strong_delimiter}"

    def is_link(node: Node) -> bool:
        return node.name == "a" and bool(node.get_attribute("href"))

    references = ReferenceLinks(style)

    return [
        Rule(name="paragraph", filter="p", replacement=_paragraph),
        Rule(name="lineBreak", filter="br", replacement=_line_break),
        Rule(name="heading", filter=("h1", "h2", "h3", "h4", "h5", "h6"), replacement=heading),
        Rule(name="blockquote", filter="blockquote", replacement=_blockquote),
        Rule(name="list", filter=("ul", "ol"), replacement=_list),
        Rule(name="listItem", filter="li", replacement=list_item),
        Rule(
            name="indentedCodeBlock",
            filter=lambda node: style.code_block_style == "indented" and _first_child_is_code(node),
            replacement=indented_code_block,
        ),
        Rule(
            name="fencedCodeBlock",
            filter=lambda node: style.code_block_style == "fenced" and _first_child_is_code(node),
            replacement=fenced_code_block,
        ),
        Rule(name="horizontalRule", filter="hr", replacement=horizontal_rule),
        Rule(
            name="inlineLink",
            filter=lambda node: style.link_style == "inlined" and is_link(node),
            replacement=inline_link,
        ),
        AppendingRule(
            name="referenceLink",
            filter=lambda node: style.link_style == "referenced" and is_link(node),
            replacement=references.replacement,
            append=references.append,
        ),
        Rule(name="emphasis", filter=("em", "i"), replacement=emphasis),
        Rule(name="strong", filter=("strong", "b"), replacement=strong),
        Rule(name="code", filter=_is_inline_code, replacement=_inline_code),
        Rule(name="image", filter="img", replacement=_image),
    ]

