"""Swivl coding-standard sniffs for PHP sources."""

__version__ = "0.1.0"
