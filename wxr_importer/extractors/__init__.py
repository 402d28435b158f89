"""
Readers for WordPress export files.

This subpackage turns a WXR document into a forward-only stream of flat
:class:`~wxr_importer.models.entity.Entity` records, emitted in document
order with child records right after their parent.
"""
