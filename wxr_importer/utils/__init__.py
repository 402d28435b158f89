"""
Utility helpers used by the import tool.

This subpackage exposes the import error types and convenience functions
for structured logging.
"""

from .errors import ERRORS, WXRParseError, WXRReadError, report_error, report_ok

__all__ = ["ERRORS", "WXRParseError", "WXRReadError", "report_error", "report_ok"]
