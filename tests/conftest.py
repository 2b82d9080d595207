"""Shared test fixtures for swivl-sniffs."""

from __future__ import annotations

import pytest

from swivl_sniffs.config import DEFAULT_SNIFF_CODE
from swivl_sniffs.sniffs.report import Reporter


@pytest.fixture()
def reporter() -> Reporter:
    """Reporter for a file named ``src/Entity/Post.php``."""
    return Reporter("src/Entity/Post.php", DEFAULT_SNIFF_CODE)
