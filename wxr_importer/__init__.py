"""
Top-level package for the WordPress WXR import utility.

This package bundles the components required to read a WordPress eXtended
RSS (WXR) export as a stream of entities and assemble it into a nested,
import-ready structure.  Modules are split into subpackages:

* :mod:`wxr_importer.extractors` – reading WXR documents as entities
* :mod:`wxr_importer.builders` – assembling entities into an aggregate
* :mod:`wxr_importer.models` – entity and aggregate models
* :mod:`wxr_importer.utils` – errors, report logging, term helpers and writers

Each layer has no direct knowledge of configuration or execution
strategy; orchestration is handled in :mod:`wxr_importer.import_tool`.
"""
