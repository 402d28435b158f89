"""
High-level orchestration of a WXR import.

This module defines a :class:`WXRImportTool` class that ties together the
entity reader, the aggregate builder and the report utilities.  It checks
that the export can be read, builds the aggregate, logs what was ignored
along the way and writes the aggregate and a posts index to the report
directory.

Configuration is supplied via a JSON file path or directly as a
dictionary.  All settings live under the ``import`` key; missing values are
taken from the environment (``WXR_REPORT_DIR``, ``WXR_HTTP_TIMEOUT``) or
from built-in defaults.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

from wxr_importer.builders.wxr_builder import WXRBuilder
from wxr_importer.extractors.entity_reader import iter_wxr_entities
from wxr_importer.models.aggregate import WXRImport
from wxr_importer.utils.errors import DEFAULT_REPORT_DIR, WXRParseError, report_error, report_ok
from wxr_importer.utils.exports import write_aggregate_json, write_posts_index_csv
from wxr_importer.utils.pre_flight_checks import PreFlightCheckError, run_source_pre_flight_checks


class WXRImportTool:
    """
    Encapsulates the configuration and steps needed to turn a WXR export
    into an import-ready aggregate.  Detailed success and failure
    information is recorded using the :mod:`wxr_importer.utils.errors`
    module.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, *, config_file: Optional[str] = None) -> None:
        if config_file and os.path.exists(config_file):
            with open(config_file, "r", encoding="utf-8") as f:
                config = json.load(f)
        elif config is None:
            config = {}

        # Ensure essential keys exist to prevent KeyErrors
        config.setdefault("import", {})
        config["import"].setdefault("report_dir", os.getenv("WXR_REPORT_DIR", DEFAULT_REPORT_DIR))
        config["import"].setdefault("http_timeout", int(os.getenv("WXR_HTTP_TIMEOUT", "30")))
        config["import"].setdefault("write_posts_index", True)
        config["import"].setdefault("dry_run", False)

        self.config = config

    @property
    def report_dir(self) -> str:
        return self.config["import"]["report_dir"]

    def log_message(self, message: str, level: str = "INFO") -> None:
        print(f"[{level}] {message}")
        os.makedirs(self.report_dir, exist_ok=True)
        with open(os.path.join(self.report_dir, "import.log"), "a", encoding="utf-8") as f:
            f.write(f"{level}: {message}\n")

    def parse_export(self, source: str) -> Optional[WXRImport]:
        """
        Read and build the export at ``source``.

        Failures are logged and reported rather than raised.

        :param source: Path or URL of the WXR file.
        :return: The built aggregate, or ``None`` if the source could not be
            read or is not a valid WXR export.
        """
        timeout = self.config["import"]["http_timeout"]
        try:
            run_source_pre_flight_checks(source, timeout=timeout)
        except PreFlightCheckError as e:
            report_error("SOURCE_UNREADABLE", source, e, report_dir=self.report_dir)
            self.log_message(str(e), "ERROR")
            return None

        self.log_message(f"Parsing WXR export {source}")
        builder = WXRBuilder()
        try:
            aggregate = builder.build(iter_wxr_entities(source, timeout=timeout))
        except WXRParseError as e:
            report_error(e.reason, source, e, report_dir=self.report_dir)
            self.log_message(f"Failed to parse {source}: {e.message}", "ERROR")
            return None

        for entity_type, count in sorted(builder.ignored.items()):
            self.log_message(f"Ignored {count} '{entity_type}' entities", level="DEBUG")

        summary = {
            "version": aggregate.version,
            "authors": len(aggregate.authors),
            "posts": len(aggregate.posts),
            "categories": len(aggregate.categories),
            "tags": len(aggregate.tags),
            "terms": len(aggregate.terms),
        }
        self.log_message(
            f"WXR {aggregate.version}: {summary['posts']} posts, {summary['authors']} authors, "
            f"{summary['categories']} categories, {summary['tags']} tags, {summary['terms']} terms"
        )
        report_ok("EXPORT_PARSED", source, summary, report_dir=self.report_dir)
        return aggregate

    def import_export(self, source: str) -> Optional[WXRImport]:
        """
        Parse ``source`` and write ``aggregate.json`` (and, if enabled,
        ``posts_index.csv``) into the report directory.  With ``dry_run``
        only the logs are written.
        """
        aggregate = self.parse_export(source)
        if aggregate is None:
            return None

        if self.config["import"]["dry_run"]:
            self.log_message(f"Dry-run: would write reports for {source} to {self.report_dir}")
            return aggregate

        try:
            written = [write_aggregate_json(aggregate, os.path.join(self.report_dir, "aggregate.json"))]
            if self.config["import"]["write_posts_index"]:
                written.append(
                    write_posts_index_csv(aggregate.posts, os.path.join(self.report_dir, "posts_index.csv"))
                )
        except OSError as e:
            report_error("REPORT_WRITE", source, e, report_dir=self.report_dir)
            self.log_message(f"Failed to write reports: {e}", "ERROR")
            return aggregate

        report_ok("REPORTS_WRITTEN", source, {"files": written}, report_dir=self.report_dir)
        return aggregate
