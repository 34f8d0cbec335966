#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2md/utils/__init__.py
"""Utility modules for the html2md package.

This package contains the markdown escaper, newline reconciliation between
rendered fragments, and dependency checking helpers.
"""

from html2md.utils.escape import escape, escape_image_alt, escape_link_destination, escape_link_title
from html2md.utils.newlines import join, separating_newlines

__all__ = [
    "escape",
    "escape_image_alt",
    "escape_link_destination",
    "escape_link_title",
    "join",
    "separating_newlines",
]
