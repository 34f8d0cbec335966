"""Pytest configuration and shared fixtures for the html2md test suite.

This module provides shared fixtures, test configuration, and Hypothesis
profiles that are used across the entire test suite.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from html2md import Node

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "golden: Golden output tests for complete documents")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")


@pytest.fixture
def parse():
    """Return a helper that parses markup into a normalized root ``Node``.

    Returns
    -------
    Callable[[str], Node]
        ``parse(html, root_tag=None)``

    """

    def _parse(html: str, root_tag: str | None = None) -> Node:
        return Node.root(html, root_tag=root_tag)

    return _parse


@pytest.fixture
def sample_html() -> str:
    """Provide a small document exercising most built-in rules.

    Returns
    -------
    str
        HTML sample used across multiple tests.

    """
    return """
    <html>
      <head><title>Ignored title</title><style>p { color: red; }</style></head>
      <body>
        <h1>Sample Document</h1>
        <p>This is a <strong>sample document</strong> with <em>italic text</em>
           and some <code>inline code</code>.</p>
        <h2>Section 2</h2>
        <ul>
          <li>Item 1</li>
          <li>Item 2</li>
        </ul>
        <ol>
          <li>First item</li>
          <li>Second item</li>
        </ol>
        <script>alert("never rendered")</script>
      </body>
    </html>
    """
