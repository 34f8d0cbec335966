#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2md/node.py
"""Read-only tree view over a parsed HTML document.

The conversion engine and the rules never touch BeautifulSoup directly;
they see the document through :class:`Node`, a thin wrapper exposing the
node kind, tag name, text content, attributes, children and siblings.

Parsing and whitespace normalization happen once, in :meth:`Node.root`,
before the engine starts. Whitespace normalization collapses runs of
insignificant whitespace the way a browser lays out inline text, so that
indentation in the HTML source does not leak into the markdown output.

"""

from __future__ import annotations

import copy
import logging
import re
from enum import Enum
from functools import lru_cache
from typing import Any, Optional

from html2md.constants import (
    BLOCK_ELEMENTS,
    CODE_CONTEXT_ELEMENTS,
    DEFAULT_HTML_PARSER,
    DEPS_HTML,
    MEANINGFUL_WHEN_BLANK_ELEMENTS,
    PREFORMATTED_ELEMENTS,
    VOID_ELEMENTS,
)
from html2md.exceptions import ParsingError
from html2md.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"[ \r\n\t]+")
_BLANK = re.compile(r"^\s*$")


class NodeKind(Enum):
    """Kind of a document tree node."""

    TEXT = "text"
    ELEMENT = "element"
    OTHER = "other"


@lru_cache(maxsize=None)
def _bs4_types() -> tuple[type, ...]:
    from bs4.element import CData, NavigableString, PreformattedString, Tag

    return Tag, NavigableString, PreformattedString, CData


def _kind_of(element: Any) -> NodeKind:
    tag, navigable_string, preformatted_string, cdata = _bs4_types()
    if isinstance(element, tag):
        return NodeKind.ELEMENT
    if isinstance(element, navigable_string) and (
        not isinstance(element, preformatted_string) or isinstance(element, cdata)
    ):
        return NodeKind.TEXT
    return NodeKind.OTHER


def _tag_name(element: Any) -> str | None:
    name = getattr(element, "name", None)
    return name.lower() if isinstance(name, str) else None


class Node:
    """Immutable view of one node of a BeautifulSoup tree.

    Parameters
    ----------
    element : bs4.element.PageElement
        The wrapped tag or string

    Notes
    -----
    Two ``Node`` instances compare equal when they wrap the same underlying
    element, so views created at different times can be compared safely.

    """

    __slots__ = ("_element", "_kind")

    def __init__(self, element: Any):
        self._element = element
        self._kind = _kind_of(element)

    @classmethod
    @requires_dependencies("html", DEPS_HTML)
    def root(cls, input_data: Any, root_tag: str | None = None) -> Node:
        """Parse ``input_data`` and return the node whose children get rendered.

        Parameters
        ----------
        input_data : str, bytes, bs4.BeautifulSoup or bs4.element.Tag
            HTML markup or an already parsed tree. Parsed trees are copied
            before normalization so the caller's tree is left untouched.
        root_tag : str, optional
            Name of the element whose subtree should be rendered. The first
            match is used; when nothing matches the whole document is rendered.

        Returns
        -------
        Node
            The root node, with insignificant whitespace collapsed

        Raises
        ------
        ParsingError
            If ``input_data`` is of an unsupported type or cannot be decoded

        """
        from bs4 import BeautifulSoup
        from bs4.element import Tag

        if isinstance(input_data, Tag):
            tree = copy.copy(input_data)
        elif isinstance(input_data, (str, bytes)):
            try:
                tree = BeautifulSoup(input_data, DEFAULT_HTML_PARSER)
            except (UnicodeDecodeError, LookupError) as e:
                raise ParsingError(
                    f"Could not decode HTML input: {e}", parsing_stage="decoding", original_error=e
                ) from e
        else:
            raise ParsingError(
                f"Unsupported input type {type(input_data).__name__}; expected HTML text or a parsed tree",
                parsing_stage="input",
            )

        root = tree
        if root_tag:
            found = tree.find(root_tag.lower())
            if isinstance(found, Tag):
                root = found
            else:
                logger.debug("Root tag <%s> not found, rendering the whole document", root_tag)
        else:
            body = tree.find("body")
            if isinstance(body, Tag):
                root = body

        collapse_whitespace(root)
        return cls(root)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Node) and other._element is self._element

    def __hash__(self) -> int:
        return id(self._element)

    def __repr__(self) -> str:
        return f"Node({self.name!r})"

    @property
    def element(self) -> Any:
        """The underlying BeautifulSoup object."""
        return self._element

    @property
    def kind(self) -> NodeKind:
        return self._kind

    @property
    def name(self) -> str:
        """Lower-case tag name, ``"#text"`` for text and ``"#other"`` otherwise."""
        if self._kind is NodeKind.ELEMENT:
            return _tag_name(self._element) or ""
        return "#text" if self._kind is NodeKind.TEXT else "#other"

    @property
    def text_content(self) -> str:
        """Concatenated text of this node and all its descendants."""
        if self._kind is NodeKind.ELEMENT:
            return self._element.get_text()
        return str(self._element)

    @property
    def inner_html(self) -> str:
        """Markup of the children of an element; the text itself for text nodes."""
        if self._kind is NodeKind.ELEMENT:
            return self._element.decode_contents()
        return str(self._element)

    @property
    def outer_html(self) -> str:
        return str(self._element)

    @property
    def is_block(self) -> bool:
        return self.name in BLOCK_ELEMENTS

    @property
    def is_void(self) -> bool:
        return self.name in VOID_ELEMENTS

    @property
    def is_code(self) -> bool:
        """True if this node or one of its ancestors is a code element."""
        if self.name in CODE_CONTEXT_ELEMENTS:
            return True
        return any(_tag_name(parent) in CODE_CONTEXT_ELEMENTS for parent in self._element.parents)

    @property
    def is_blank(self) -> bool:
        """True for elements that render to nothing: no text, no images, no cells."""
        if self._kind is not NodeKind.ELEMENT:
            return False
        if self.is_void or self.name in MEANINGFUL_WHEN_BLANK_ELEMENTS:
            return False
        if not _BLANK.match(self.text_content):
            return False
        meaningful = list(VOID_ELEMENTS | MEANINGFUL_WHEN_BLANK_ELEMENTS)
        return self._element.find(meaningful) is None

    def get_attribute(self, name: str) -> Optional[str]:
        """Return the value of attribute ``name``, or None when absent."""
        if self._kind is not NodeKind.ELEMENT:
            return None
        value = self._element.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    @property
    def attributes(self) -> dict[str, str]:
        if self._kind is not NodeKind.ELEMENT:
            return {}
        return {key: " ".join(value) if isinstance(value, list) else value for key, value in self._element.attrs.items()}

    def child_nodes(self) -> list[Node]:
        """Children in document order."""
        if self._kind is not NodeKind.ELEMENT:
            return []
        return [Node(child) for child in self._element.contents]

    def element_children(self) -> list[Node]:
        return [child for child in self.child_nodes() if child.kind is NodeKind.ELEMENT]

    @property
    def first_child(self) -> Optional[Node]:
        if self._kind is not NodeKind.ELEMENT or not self._element.contents:
            return None
        return Node(self._element.contents[0])

    @property
    def first_element_child(self) -> Optional[Node]:
        children = self.element_children()
        return children[0] if children else None

    @property
    def last_element_child(self) -> Optional[Node]:
        children = self.element_children()
        return children[-1] if children else None

    @property
    def parent(self) -> Optional[Node]:
        parent = self._element.parent
        return Node(parent) if parent is not None else None

    @property
    def previous_sibling(self) -> Optional[Node]:
        sibling = self._element.previous_sibling
        return Node(sibling) if sibling is not None else None

    @property
    def next_sibling(self) -> Optional[Node]:
        sibling = self._element.next_sibling
        return Node(sibling) if sibling is not None else None

    @property
    def previous_element_sibling(self) -> Optional[Node]:
        sibling = self.previous_sibling
        while sibling is not None and sibling.kind is not NodeKind.ELEMENT:
            sibling = sibling.previous_sibling
        return sibling

    @property
    def element_index(self) -> int:
        """Position of this node among its parent's element children."""
        tag = _bs4_types()[0]
        index = 0
        sibling = self._element.previous_sibling
        while sibling is not None:
            if isinstance(sibling, tag):
                index += 1
            sibling = sibling.previous_sibling
        return index

    def find(self, name: str) -> Optional[Node]:
        """Return the first descendant element named ``name``."""
        if self._kind is not NodeKind.ELEMENT:
            return None
        found = self._element.find(name)
        return Node(found) if found is not None else None

    def find_child(self, name: str) -> Optional[Node]:
        """Return the first element child named ``name``."""
        if self._kind is not NodeKind.ELEMENT:
            return None
        found = self._element.find(name, recursive=False)
        return Node(found) if found is not None else None


def _is_pre(element: Any) -> bool:
    return _tag_name(element) in PREFORMATTED_ELEMENTS


def _next_node(prev: Any, current: Any) -> Any:
    """Return the node after ``current`` in a depth-first walk that skips ``<pre>`` contents."""
    if (prev is not None and prev.parent is current) or _is_pre(current):
        return current.next_sibling if current.next_sibling is not None else current.parent
    contents = getattr(current, "contents", None)
    if contents:
        return contents[0]
    return current.next_sibling if current.next_sibling is not None else current.parent


def _remove_node(node: Any) -> Any:
    following = node.next_sibling if node.next_sibling is not None else node.parent
    node.extract()
    return following


def _replace_text(node: Any, text: str) -> Any:
    replacement = type(node)(text)
    node.replace_with(replacement)
    return replacement


def collapse_whitespace(element: Any) -> None:
    """Collapse insignificant whitespace in the subtree of ``element`` in place.

    Runs of spaces, tabs and line breaks become a single space; a space is
    dropped at the start of a block or after another space; a trailing space
    is dropped before a block boundary or ``<br>``. Comments and other
    non-text, non-element nodes are removed. ``<pre>`` subtrees are kept
    verbatim.

    Parameters
    ----------
    element : bs4.element.Tag
        Root of the subtree to normalize

    """
    if not getattr(element, "contents", None) or _is_pre(element):
        return

    prev_text: Any = None
    keep_leading_ws = False
    prev: Any = None
    node = _next_node(prev, element)

    while node is not element:
        kind = _kind_of(node)
        if kind is NodeKind.TEXT:
            text = _WHITESPACE_RUN.sub(" ", str(node))
            if (prev_text is None or str(prev_text).endswith(" ")) and not keep_leading_ws and text.startswith(" "):
                text = text[1:]
            if not text:
                node = _remove_node(node)
                continue
            node = _replace_text(node, text)
            prev_text = node
        elif kind is NodeKind.ELEMENT:
            name = _tag_name(node)
            if name in BLOCK_ELEMENTS or name == "br":
                if prev_text is not None and str(prev_text).endswith(" "):
                    trimmed = _replace_text(prev_text, str(prev_text)[:-1])
                    if prev is prev_text:
                        prev = trimmed
                prev_text = None
                keep_leading_ws = False
            elif name in VOID_ELEMENTS or _is_pre(node):
                prev_text = None
                keep_leading_ws = True
            elif prev_text is not None:
                keep_leading_ws = False
        else:
            node = _remove_node(node)
            continue

        following = _next_node(prev, node)
        prev = node
        node = following

    if prev_text is not None and str(prev_text).endswith(" "):
        text = str(prev_text)[:-1]
        if text:
            _replace_text(prev_text, text)
        else:
            prev_text.extract()
