"""Sniffs and the diagnostic sink they report to."""

from swivl_sniffs.sniffs.report import Diagnostic, Finding, Reporter

__all__ = [
    "Diagnostic",
    "Finding",
    "Reporter",
]
