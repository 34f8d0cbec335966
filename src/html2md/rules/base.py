#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2md/rules/base.py
"""Rule descriptors and per-conversion rule resolution.

A :class:`Rule` pairs a filter (which elements it handles) with a
replacement templater ``(content, node) -> str``. Rules that must emit
trailing content once per conversion, such as reference link definitions,
are :class:`AppendingRule` instances and additionally provide ``append()``.

A :class:`RuleSet` is the ordered rule table of one conversion. It is built
fresh for every call, so ignored tags and caller rules never leak from one
conversion into another.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Union

from html2md.exceptions import RuleResolutionError, ValidationError
from html2md.node import Node

logger = logging.getLogger(__name__)

RuleFilter = Union[str, Iterable[str], Callable[[Node], bool]]
Replacement = Callable[[str, Node], str]


@dataclass(frozen=True, eq=False)
class Rule:
    """Formatting rule for a family of elements.

    Parameters
    ----------
    name : str
        Rule name, e.g. ``"paragraph"`` or ``"image"``
    filter : str, iterable of str, or callable
        A tag name, a collection of tag names, or a predicate over ``Node``
    replacement : callable
        ``replacement(content, node)`` returning the markdown for the element,
        where ``content`` is the already rendered markdown of its children

    Notes
    -----
    Rules compare and hash by identity.

    """

    name: str
    filter: RuleFilter
    replacement: Replacement

    def __post_init__(self) -> None:
        if not callable(self.replacement):
            raise ValidationError(
                f"Rule '{self.name}' needs a callable replacement",
                parameter_name="replacement",
                parameter_value=self.replacement,
            )
        if isinstance(self.filter, str):
            object.__setattr__(self, "filter", frozenset({self.filter.lower()}))
        elif not callable(self.filter):
            object.__setattr__(self, "filter", frozenset(tag.lower() for tag in self.filter))

    def matches(self, node: Node) -> bool:
        if callable(self.filter):
            return bool(self.filter(node))
        return node.name in self.filter


@dataclass(frozen=True, eq=False)
class AppendingRule(Rule):
    """Rule that also contributes content once, after the whole document.

    Parameters
    ----------
    append : callable
        ``append()`` returning the deferred content, e.g. link definitions

    """

    append: Callable[[], str]

    def __post_init__(self) -> None:
        super().__post_init__()
        if not callable(self.append):
            raise ValidationError(
                f"Rule '{self.name}' needs a callable append",
                parameter_name="append",
                parameter_value=self.append,
            )


def _blank_replacement(content: str, node: Node) -> str:
    return "\n\n" if node.is_block else ""


def _default_replacement(content: str, node: Node) -> str:
    return f"\n\n{content}\n\n" if node.is_block else content


IGNORE_RULE = Rule(name="ignore", filter=lambda node: False, replacement=lambda content, node: "")
BLANK_RULE = Rule(name="blank", filter=lambda node: node.is_blank, replacement=_blank_replacement)
DEFAULT_RULE = Rule(name="default", filter=lambda node: True, replacement=_default_replacement)


class RuleSet:
    """Ordered rule table used to resolve one rule per element.

    Resolution order:

    1. ignored tag names resolve to the ignore rule (renders nothing);
    2. caller rules, in the order they were added;
    3. the blank rule for elements with no meaningful content;
    4. built-in rules, in registration order;
    5. the default rule.

    Parameters
    ----------
    rules : iterable of Rule
        Built-in rules in priority order
    default_rule : Rule or None, default DEFAULT_RULE
        Rule used when nothing else matches

    """

    def __init__(self, rules: Iterable[Rule] = (), default_rule: Rule | None = DEFAULT_RULE):
        self._rules: list[Rule] = list(rules)
        self._default_rule = default_rule
        self._custom_rules: list[Rule] = []
        self._ignored: set[str] = set()

    @property
    def ignored(self) -> frozenset[str]:
        return frozenset(self._ignored)

    @property
    def custom_rules(self) -> tuple[Rule, ...]:
        return tuple(self._custom_rules)

    def add_ignore(self, tags: Iterable[str]) -> None:
        """Render every element named in ``tags`` as nothing."""
        tags = [tag.lower() for tag in tags]
        self._ignored.update(tags)
        logger.debug("Ignoring elements: %s", ", ".join(sorted(tags)))

    def add_rules(self, rules: Iterable[Rule]) -> None:
        """Add caller rules, which take precedence over every built-in rule."""
        for rule in rules:
            if not isinstance(rule, Rule):
                raise ValidationError(
                    f"Expected a Rule instance, got {type(rule).__name__}",
                    parameter_name="rules",
                    parameter_value=rule,
                )
            self._custom_rules.append(rule)
            logger.debug("Registered custom rule '%s'", rule.name)

    def find_rule(self, node: Node) -> Rule:
        """Return the rule that renders ``node``.

        Raises
        ------
        RuleResolutionError
            If no rule matches, which means the default rule is missing

        """
        if node.name in self._ignored:
            return IGNORE_RULE
        for rule in self._custom_rules:
            if rule.matches(node):
                return rule
        if BLANK_RULE.matches(node):
            return BLANK_RULE
        for rule in self._rules:
            if rule.matches(node):
                return rule
        if self._default_rule is not None:
            return self._default_rule
        raise RuleResolutionError(f"No rule matches <{node.name}>", node_name=node.name)
