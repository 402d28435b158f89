"""
Error types and structured logging helpers for WXR imports.

The :mod:`wxr_importer.utils.errors` module centralizes both the exceptions
raised while reading an export and the writing of log entries for failed
and successful import runs.  Each log entry is appended to a JSON Lines file
under the report directory (``reports/import`` by default) so that the
information can be reviewed or parsed after a run.

Two public logging functions are provided:

``report_error``
    Record an error that occurred for an export source.  An optional
    exception can be supplied and will be serialized to the log.

``report_ok``
    Record a successful step for an export source.  Additional key/value
    information can be attached to the entry via the ``extra`` parameter.

The ``ERRORS`` dictionary maps error or event codes to human readable
messages.  Codes not present in the dictionary fall back to the code itself.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

# Mapping of event codes used throughout the import to descriptive messages.
# The keys include both error and success codes as the same lookup is used by
# :func:`report_error` and :func:`report_ok`.
ERRORS: Dict[str, str] = {
    "WXR_PARSE_ERROR": "There was an error when reading this WXR file",
    "WXR_INVALID_VERSION": "This does not appear to be a WXR file, missing/invalid WXR version number",
    "SOURCE_UNREADABLE": "The export source could not be read",
    "REPORT_WRITE": "Failed to write import reports",
    "EXPORT_PARSED": "Export parsed successfully",
    "REPORTS_WRITTEN": "Import reports written",
}

DEFAULT_REPORT_DIR = os.path.join("reports", "import")


class WXRReadError(Exception):
    """Raised by the entity stream when the underlying document cannot be read."""


class WXRParseError(Exception):
    """A failed build of a WXR export.

    ``code`` is stable for every failure; ``reason`` is one of the
    :data:`ERRORS` keys and tells stream failures apart from a rejected
    version marker.
    """

    code = "WXR_parse_error"

    def __init__(self, message: str, *, reason: str = "WXR_PARSE_ERROR") -> None:
        super().__init__(message)
        self.message = message
        self.reason = reason

    @classmethod
    def invalid_version(cls) -> "WXRParseError":
        return cls(ERRORS["WXR_INVALID_VERSION"], reason="WXR_INVALID_VERSION")


def _write_jsonl(path: str, data: Dict[str, Any]) -> None:
    """Append ``data`` as a JSON object followed by a newline to ``path``."""
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False)
        f.write("\n")


def report_error(
    code: str,
    source: str,
    exc: Optional[Exception] = None,
    *,
    report_dir: str = DEFAULT_REPORT_DIR,
) -> None:
    """Log an error event for the export ``source``.

    Parameters
    ----------
    code:
        A key identifying the type of error.  If ``code`` is present in
        :data:`ERRORS` its value will be used as the message.
    source:
        Path or URL of the export being imported.
    exc:
        Optional exception instance that triggered the error.  The string
        representation of the exception will be included in the log entry,
        along with its ``reason`` when it is a :class:`WXRParseError`.
    report_dir:
        Directory holding ``errors.jsonl``.
    """
    message = ERRORS.get(code, code)
    entry: Dict[str, Any] = {
        "code": code,
        "message": message,
        "source": source,
    }
    if exc is not None:
        entry["error"] = str(exc)
        if isinstance(exc, WXRParseError):
            entry["reason"] = exc.reason
    print(f"[ERROR] {message} - {source}")
    _write_jsonl(os.path.join(report_dir, "errors.jsonl"), entry)


def report_ok(
    code: str,
    source: str,
    extra: Optional[Dict[str, Any]] = None,
    *,
    report_dir: str = DEFAULT_REPORT_DIR,
) -> None:
    """Log a successful event for the export ``source``.

    Parameters
    ----------
    code:
        A key identifying the type of event.
    source:
        Path or URL of the export being imported.
    extra:
        Optional dictionary of additional fields to merge into the log entry.
    report_dir:
        Directory holding ``success.jsonl``.
    """
    message = ERRORS.get(code, code)
    entry: Dict[str, Any] = {
        "code": code,
        "message": message,
        "source": source,
    }
    if extra:
        entry.update(extra)
    print(f"[OK] {message} - {source}")
    _write_jsonl(os.path.join(report_dir, "success.jsonl"), entry)
