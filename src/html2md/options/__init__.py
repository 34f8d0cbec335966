#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for html2md conversions.

Options are frozen dataclasses validated on construction, so a conversion
never starts with an invalid configuration.
"""

from html2md.options.base import CloneFrozenMixin
from html2md.options.style import StyleOptions

__all__ = [
    "CloneFrozenMixin",
    "StyleOptions",
]
