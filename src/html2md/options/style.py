#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Markdown output style options.

This module defines the style options that control how the built-in rules
format headings, rules, lists, code, emphasis and links. Values are
validated on construction; an unrecognized value is reported to the caller
instead of silently falling back to the default.
"""
# src/html2md/options/style.py

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping

from html2md.constants import (
    BULLET_LIST_MARKERS,
    CODE_BLOCK_STYLES,
    CODE_FENCES,
    DEFAULT_BULLET_LIST_MARKER,
    DEFAULT_CODE_BLOCK_STYLE,
    DEFAULT_EM_DELIMITER,
    DEFAULT_FENCE,
    DEFAULT_HEADING_STYLE,
    DEFAULT_HR,
    DEFAULT_LINK_REFERENCE_STYLE,
    DEFAULT_LINK_STYLE,
    DEFAULT_STRONG_DELIMITER,
    EM_DELIMITERS,
    HEADING_STYLES,
    HORIZONTAL_RULES,
    LINK_REFERENCE_STYLES,
    LINK_STYLES,
    STRONG_DELIMITERS,
    STYLE_OPTION_ALIASES,
    BulletListMarker,
    CodeBlockStyle,
    CodeFence,
    EmDelimiter,
    HeadingStyle,
    HorizontalRule,
    LinkReferenceStyle,
    LinkStyle,
    StrongDelimiter,
)
from html2md.exceptions import ValidationError
from html2md.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class StyleOptions(CloneFrozenMixin):
    """Formatting style used by the built-in markdown rules.

    Parameters
    ----------
    heading_style : {"setext", "atx"}, default "setext"
        Underlined headings for levels 1 and 2, or ``#`` prefixed headings.
    hr : {"* * *", "- - -", "_ _ _"}, default "* * *"
        Text emitted for ``<hr>``.
    bullet_list_marker : {"*", "-", "_"}, default "*"
        Marker for unordered list items.
    code_block_style : {"indented", "fenced"}, default "indented"
        How ``<pre><code>`` blocks are written.
    fence : {"```", "~~~"}, default "```"
        Fence used when ``code_block_style`` is "fenced".
    em_delimiter : {"_", "*"}, default "_"
        Delimiter for emphasis.
    strong_delimiter : {"**", "__"}, default "**"
        Delimiter for strong emphasis.
    link_style : {"inlined", "referenced"}, default "inlined"
        Inline ``[text](href)`` links, or reference links collected at the end.
    link_reference_style : {"full", "collapsed", "shortcut"}, default "full"
        Reference label form used when ``link_style`` is "referenced".

    """

    heading_style: HeadingStyle = field(
        default=DEFAULT_HEADING_STYLE,
        metadata={"help": "Heading style for levels 1 and 2", "choices": HEADING_STYLES},
    )
    hr: HorizontalRule = field(
        default=DEFAULT_HR,
        metadata={"help": "Horizontal rule text", "choices": HORIZONTAL_RULES},
    )
    bullet_list_marker: BulletListMarker = field(
        default=DEFAULT_BULLET_LIST_MARKER,
        metadata={"help": "Unordered list item marker", "choices": BULLET_LIST_MARKERS},
    )
    code_block_style: CodeBlockStyle = field(
        default=DEFAULT_CODE_BLOCK_STYLE,
        metadata={"help": "Code block style", "choices": CODE_BLOCK_STYLES},
    )
    fence: CodeFence = field(
        default=DEFAULT_FENCE,
        metadata={"help": "Fence for fenced code blocks", "choices": CODE_FENCES},
    )
    em_delimiter: EmDelimiter = field(
        default=DEFAULT_EM_DELIMITER,
        metadata={"help": "Emphasis delimiter", "choices": EM_DELIMITERS},
    )
    strong_delimiter: StrongDelimiter = field(
        default=DEFAULT_STRONG_DELIMITER,
        metadata={"help": "Strong emphasis delimiter", "choices": STRONG_DELIMITERS},
    )
    link_style: LinkStyle = field(
        default=DEFAULT_LINK_STYLE,
        metadata={"help": "Inline or reference links", "choices": LINK_STYLES},
    )
    link_reference_style: LinkReferenceStyle = field(
        default=DEFAULT_LINK_REFERENCE_STYLE,
        metadata={"help": "Reference link label form", "choices": LINK_REFERENCE_STYLES},
    )

    def __post_init__(self) -> None:
        """Validate every field against its allowed choices.

        Raises
        ------
        ValidationError
            If any field holds a value outside its choices.

        """
        for f in fields(self):
            value = getattr(self, f.name)
            choices = f.metadata["choices"]
            if value not in choices:
                allowed = ", ".join(repr(choice) for choice in choices)
                raise ValidationError(
                    f"Invalid value {value!r} for style option '{f.name}'; expected one of {allowed}",
                    parameter_name=f.name,
                    parameter_value=value,
                )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> StyleOptions:
        """Build style options from a mapping of option names to values.

        Keys may use either the camelCase names (``headingStyle``) or the
        field names (``heading_style``).

        Parameters
        ----------
        mapping : Mapping[str, Any] or None
            Option values; missing keys keep their defaults

        Returns
        -------
        StyleOptions
            Validated options

        Raises
        ------
        ValidationError
            If a key is unknown or a value is not allowed

        """
        if not mapping:
            return cls()

        field_names = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in mapping.items():
            name = STYLE_OPTION_ALIASES.get(key, key)
            if name not in field_names:
                raise ValidationError(
                    f"Unknown style option '{key}'",
                    parameter_name=key,
                    parameter_value=value,
                )
            kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def coerce(cls, value: StyleOptions | Mapping[str, Any] | None) -> StyleOptions:
        """Return ``value`` as ``StyleOptions``, converting mappings and None."""
        if isinstance(value, cls):
            return value
        if value is None or isinstance(value, Mapping):
            return cls.from_mapping(value)
        raise ValidationError(
            f"style_options must be a StyleOptions instance or a mapping, got {type(value).__name__}",
            parameter_name="style_options",
            parameter_value=value,
        )
