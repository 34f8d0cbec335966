#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2md/utils/newlines.py
"""Newline reconciliation between adjacent markdown fragments.

Every rendered fragment may start or end with a run of newlines requesting
separation from its neighbour. When two fragments meet, the newlines on
both sides of the seam add up, capped at one blank line.

Examples
--------
    >>> join("a\\n", "\\nb")
    'a\\n\\nb'
    >>> join("a", "b")
    'ab'
    >>> join("a\\n\\n\\n", "\\n\\nb")
    'a\\n\\nb'

"""

from __future__ import annotations

MAX_SEPARATING_NEWLINES = 2


def leading_newlines(text: str) -> int:
    """Return the length of the run of newlines at the start of ``text``."""
    return len(text) - len(text.lstrip("\n"))


def trailing_newlines(text: str) -> int:
    """Return the length of the run of newlines at the end of ``text``."""
    return len(text) - len(text.rstrip("\n"))


def separating_newlines(output: str, replacement: str) -> str:
    """Return the separator to place between ``output`` and ``replacement``.

    Parameters
    ----------
    output : str
        Fragment rendered so far
    replacement : str
        Fragment being appended

    Returns
    -------
    str
        Zero, one or two newlines

    """
    count = trailing_newlines(output) + leading_newlines(replacement)
    return "\n" * min(count, MAX_SEPARATING_NEWLINES)


def join(output: str, replacement: str) -> str:
    """Join two fragments, replacing the newlines at the seam with the reconciled separator."""
    separator = separating_newlines(output, replacement)
    return output.rstrip("\n") + separator + replacement.lstrip("\n")
