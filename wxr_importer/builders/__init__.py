"""
Builders that assemble entity streams into nested aggregates.

Currently this subpackage exposes ``WXRBuilder`` and ``build_import`` from
:mod:`wxr_importer.builders.wxr_builder`.
"""

from .wxr_builder import WXRBuilder, build_import

__all__ = ["WXRBuilder", "build_import"]
