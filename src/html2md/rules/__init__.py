#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2md/rules/__init__.py
"""Formatting rules and rule resolution.

The built-in table is made of the CommonMark rules followed by the GFM
extensions. :func:`build_rule_set` assembles a fresh table for a single
conversion, including the caller's ignored tags and custom rules.
"""

from __future__ import annotations

from typing import Iterable

from html2md.constants import DEFAULT_REMOVED_ELEMENTS
from html2md.options.style import StyleOptions
from html2md.rules.base import BLANK_RULE, DEFAULT_RULE, IGNORE_RULE, AppendingRule, Rule, RuleSet
from html2md.rules.commonmark import commonmark_rules
from html2md.rules.gfm import gfm_rules


def build_rule_set(
    style: StyleOptions,
    ignore: Iterable[str] = (),
    rules: Iterable[Rule] = (),
) -> RuleSet:
    """Build the rule table for one conversion.

    Parameters
    ----------
    style : StyleOptions
        Output style for the built-in rules
    ignore : iterable of str, optional
        Tag names rendered as nothing, in addition to script, style and template
    rules : iterable of Rule, optional
        Caller rules, consulted before every built-in rule

    Returns
    -------
    RuleSet
        A rule table owned by a single conversion

    """
    rule_set = RuleSet(commonmark_rules(style) + gfm_rules(style))
    rule_set.add_ignore(DEFAULT_REMOVED_ELEMENTS)
    ignore = list(ignore)
    if ignore:
        rule_set.add_ignore(ignore)
    rules = list(rules)
    if rules:
        rule_set.add_rules(rules)
    return rule_set


__all__ = [
    "AppendingRule",
    "BLANK_RULE",
    "DEFAULT_RULE",
    "IGNORE_RULE",
    "Rule",
    "RuleSet",
    "build_rule_set",
    "commonmark_rules",
    "gfm_rules",
]
