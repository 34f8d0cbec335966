#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2md/converter.py
"""HTML to Markdown conversion engine.

The engine walks the document tree depth first, once. Text nodes are
escaped (unless they sit inside code), elements are rendered by the single
rule the rule table resolves for them, and every pair of adjacent fragments
is joined with newline reconciliation. Rules that contribute deferred
content, such as reference link definitions, are recorded as they are met
and appended once, in first-encounter order, after traversal.

All mutable state of a conversion lives in a :class:`ConversionContext`
created for that call and passed explicitly through traversal. Nothing is
shared between conversions, so independent conversions can run
concurrently.

Examples
--------
    >>> from html2md import convert
    >>> convert("<p>Hello <b>world</b>!</p>")
    'Hello **world**!'
    >>> convert('<img src="/a.png">', image_base_url="https://cdn.example")
    '![](https://cdn.example/a.png)'
    >>> convert("<h1>Title</h1>", style_options={"headingStyle": "atx"})
    '# Title'

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping
from urllib.parse import urlparse

from html2md.exceptions import ValidationError
from html2md.node import Node, NodeKind
from html2md.options.style import StyleOptions
from html2md.rules import AppendingRule, Rule, RuleSet, build_rule_set
from html2md.utils.decorators import debug_timer
from html2md.utils.escape import escape, escape_link_destination
from html2md.utils.newlines import join
from html2md.whitespace import flanking_whitespace

logger = logging.getLogger(__name__)

_LEADING_BLANK = re.compile(r"^[\t\r\n]+")
_TRAILING_BLANK = re.compile(r"[\t\r\n]+$")
# Image text up to the opening parenthesis of the destination
_IMAGE_TEXT = re.compile(r"!\[(?:\\.|[^\\\]])*\]\(")


@dataclass
class ConversionContext:
    """State owned by one conversion.

    Parameters
    ----------
    rules : RuleSet
        Rule table of this conversion
    image_base_url : str or None
        Base URL prefixed to relative image sources
    append_rules : dict
        Appending rules met during traversal, in first-encounter order

    """

    rules: RuleSet
    image_base_url: str | None = None
    append_rules: dict[AppendingRule, None] = field(default_factory=dict)

    def record_append_rule(self, rule: AppendingRule) -> None:
        self.append_rules.setdefault(rule, None)


def rebase_image_src(src: str, base_url: str) -> str:
    """Prefix a relative image source with ``base_url``.

    A ``/`` is inserted only when neither side provides one, and a doubled
    separator is collapsed. Sources that already carry a scheme or host
    (``https://``, ``data:``, ``//cdn``) are returned unchanged.
    """
    parsed = urlparse(src)
    if parsed.scheme or parsed.netloc:
        return src
    if base_url.endswith("/") and src.startswith("/"):
        return base_url + src[1:]
    if base_url.endswith("/") or src.startswith("/"):
        return base_url + src
    return f"{base_url}/{src}"


def process(node: Node, context: ConversionContext) -> str:
    """Render the children of ``node`` and join them into one fragment."""
    output = ""
    for child in node.child_nodes():
        if child.kind is NodeKind.TEXT:
            text = child.text_content
            replacement = text if child.is_code else escape(text)
        elif child.kind is NodeKind.ELEMENT:
            replacement = replacement_for_node(child, context)
        else:
            replacement = ""
        output = join(output, replacement)
    return output


def replacement_for_node(node: Node, context: ConversionContext) -> str:
    """Render one element with the rule resolved for it."""
    rule = context.rules.find_rule(node)
    if isinstance(rule, AppendingRule):
        context.record_append_rule(rule)

    content = process(node, context)
    whitespace = flanking_whitespace(node)
    if whitespace:
        content = content.strip()

    replacement = rule.replacement(content, node)

    if rule.name == "image" and context.image_base_url:
        replacement = _rebase_rendered_image(replacement, node.get_attribute("src"), context.image_base_url)

    return whitespace.wrap(replacement)


def _rebase_rendered_image(replacement: str, src: str | None, base_url: str) -> str:
    """Rewrite the destination of a rendered ``![alt](src ...)`` image, leaving alt and title alone."""
    if not src:
        return replacement
    rebased = rebase_image_src(src, base_url)
    if rebased == src:
        return replacement

    destination = escape_link_destination(src)
    match = _IMAGE_TEXT.search(replacement)
    start = match.end() if match else 0
    end = start + len(destination)
    if match is None or replacement[start:end] != destination or replacement[end : end + 1] not in (")", " "):
        logger.debug("No image destination for %s in rendered output, not rebased", src)
        return replacement

    logger.debug("Rebased image source %s -> %s", src, rebased)
    return replacement[:start] + escape_link_destination(rebased) + replacement[end:]


def post_process(output: str, context: ConversionContext) -> str:
    """Append deferred rule content, then strip leading and trailing blank runs."""
    for rule in context.append_rules:
        output = join(output, rule.append())

    if not output:
        return ""
    output = _LEADING_BLANK.sub("", output)
    return _TRAILING_BLANK.sub("", output)


def _validate_tag_names(tags: Iterable[str] | None, parameter_name: str) -> tuple[str, ...]:
    if tags is None:
        return ()
    if isinstance(tags, str):
        raise ValidationError(
            f"{parameter_name} must be a list of tag names, not a single string",
            parameter_name=parameter_name,
            parameter_value=tags,
        )
    names = tuple(tags)
    for name in names:
        if not isinstance(name, str) or not name:
            raise ValidationError(
                f"{parameter_name} entries must be non-empty tag names, got {name!r}",
                parameter_name=parameter_name,
                parameter_value=name,
            )
    return names


def _validate_rules(rules: Iterable[Rule] | None) -> tuple[Rule, ...]:
    if rules is None:
        return ()
    validated = tuple(rules)
    for rule in validated:
        if not isinstance(rule, Rule):
            raise ValidationError(
                f"rules entries must be Rule instances, got {type(rule).__name__}",
                parameter_name="rules",
                parameter_value=rule,
            )
    return validated


def _validate_optional_str(value: Any, parameter_name: str) -> str | None:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError(
            f"{parameter_name} must be a string, got {type(value).__name__}",
            parameter_name=parameter_name,
            parameter_value=value,
        )
    return value


class MarkdownConverter:
    """HTML to Markdown converter.

    The configuration is validated once, on construction. Every call to
    :meth:`convert` then runs with its own rule table and its own deferred
    content, so a converter can be reused and shared between threads.

    Parameters
    ----------
    root_tag : str, optional
        Render only the children of the first element with this tag name.
        The whole document is rendered when no element matches.
    image_base_url : str, optional
        Base URL prefixed to relative image sources.
    style_options : StyleOptions or mapping, optional
        Output style. Mappings may use camelCase keys (``headingStyle``) or
        field names (``heading_style``).
    ignore : iterable of str, optional
        Tag names to drop entirely, contents included.
    rules : iterable of Rule, optional
        Caller rules, consulted before the built-in rules.

    Raises
    ------
    ValidationError
        If any argument or style option value is invalid.

    """

    def __init__(
        self,
        *,
        root_tag: str | None = None,
        image_base_url: str | None = None,
        style_options: StyleOptions | Mapping[str, Any] | None = None,
        ignore: Iterable[str] | None = None,
        rules: Iterable[Rule] | None = None,
    ):
        self.root_tag = _validate_optional_str(root_tag, "root_tag")
        self.image_base_url = _validate_optional_str(image_base_url, "image_base_url")
        self.style = StyleOptions.coerce(style_options)
        self.ignore = _validate_tag_names(ignore, "ignore")
        self.rules = _validate_rules(rules)

    def create_context(self) -> ConversionContext:
        """Create the state for one conversion."""
        return ConversionContext(
            rules=build_rule_set(self.style, ignore=self.ignore, rules=self.rules),
            image_base_url=self.image_base_url,
        )

    def convert(self, input_data: Any) -> str:
        """Convert HTML to Markdown.

        Parameters
        ----------
        input_data : str, bytes, bs4.BeautifulSoup or bs4.element.Tag
            HTML markup or an already parsed tree

        Returns
        -------
        str
            Markdown with leading and trailing blank lines removed

        Raises
        ------
        ParsingError
            If the input cannot be parsed
        DependencyError
            If BeautifulSoup is not installed

        """
        context = self.create_context()
        root = Node.root(input_data, root_tag=self.root_tag)
        with debug_timer(logger, "HTML to Markdown conversion"):
            output = process(root, context)
            return post_process(output, context)


def convert(
    input_data: Any,
    *,
    root_tag: str | None = None,
    image_base_url: str | None = None,
    style_options: StyleOptions | Mapping[str, Any] | None = None,
    ignore: Iterable[str] | None = None,
    rules: Iterable[Rule] | None = None,
) -> str:
    """Convert HTML to Markdown.

    See :class:`MarkdownConverter` for the meaning of the keyword arguments.

    Parameters
    ----------
    input_data : str, bytes, bs4.BeautifulSoup or bs4.element.Tag
        HTML markup or an already parsed tree

    Returns
    -------
    str
        Markdown with leading and trailing blank lines removed

    """
    converter = MarkdownConverter(
        root_tag=root_tag,
        image_base_url=image_base_url,
        style_options=style_options,
        ignore=ignore,
        rules=rules,
    )
    return converter.convert(input_data)
