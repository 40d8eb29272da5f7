"""Pytest configuration and shared fixtures for the ao3kit test suite.

This module provides shared fixtures, test configuration, and sample
chapter markup used across the test suite.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


SKIN_CSS = """
#workskin .FogLandry { color: #fc4e47; font-weight: bold; }
#workskin .Narrator { background-color: #000000; color: #0AF; }
#workskin .Plain { font-style: italic; }
"""

CHAPTER_PAGE = """<!DOCTYPE html>
<html>
<head>
<title>Chapter 2 - Example Work</title>
<style type="text/css">#workskin .FogLandry { color: #fc4e47; }</style>
</head>
<body>
<div id="workskin">
  <div class="chapter preface group">
    <h3 class="title"><a href="/works/1/chapters/2">Chapter 2</a>: The Fog</h3>
    <div class="summary module">
      <blockquote class="userstuff"><p>Something <em>happens</em>.</p></blockquote>
    </div>
    <div class="notes module">
      <blockquote class="userstuff"><p>Thanks for reading!</p><p>More soon.</p></blockquote>
    </div>
    <div class="notes module"><p>No userstuff here</p></div>
  </div>
  <div class="userstuff module" role="article">
    <h3 class="landmark heading">Chapter Text</h3>
    <p>First <b>bold</b> line.</p>
    <p><span class="FogLandry">Fog speaks.</span></p>
  </div>
</div>
</body>
</html>
"""


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def skin_css() -> str:
    """Work skin stylesheet with two colored classes and one uncolored class."""
    return SKIN_CSS


@pytest.fixture
def chapter_page() -> str:
    """Full chapter page as served by the archive."""
    return CHAPTER_PAGE
