from __future__ import annotations

import re
from enum import Enum
from typing import Any, Dict, FrozenSet, List


_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class TermSource(Enum):
    """The three entity shapes that end up as term entries.

    Each variant knows the aggregate collection it is appended to and the
    fields dropped from its payload.  Categories and tags keep the legacy
    shape (no ``taxonomy``/``term_description``); generic terms keep every
    field because importers read them under other names.
    """

    CATEGORY = ("category", "categories", frozenset({"taxonomy", "term_description"}))
    TAG = ("tag", "tags", frozenset({"taxonomy", "term_description"}))
    TERM = ("term", "terms", frozenset())

    def __init__(self, entity_type: str, collection: str, stripped: FrozenSet[str]) -> None:
        self.entity_type = entity_type
        self.collection = collection
        self.stripped = stripped

    @classmethod
    def for_entity_type(cls, entity_type: str) -> "TermSource":
        for source in cls:
            if source.entity_type == entity_type:
                return source
        raise ValueError(f"{entity_type!r} is not a term entity type")

    def make_entry(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Return a new term entry built from ``data`` (which is not modified)."""
        entry = {k: v for k, v in data.items() if k not in self.stripped}
        if entry.get("term_id") is not None:
            entry["term_id"] = coerce_term_id(entry["term_id"])
        return entry


TERM_ENTITY_TYPES = frozenset(source.entity_type for source in TermSource)


def coerce_term_id(value: Any) -> int:
    """Cast a raw ``term_id`` to ``int``.

    Integers pass through, floats are truncated and text keeps its leading
    signed digits (``"12abc"`` -> 12).  Anything without a leading number
    becomes 0.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    match = _LEADING_INT.match(str(value))
    if not match:
        return 0
    return int(match.group(1))


def normalize_post_terms(terms: List[Any]) -> List[Any]:
    """
    Rewrite inline post term references to the ``{domain, slug, name}`` shape.

    - Entries with a non-null ``domain`` are kept as they are
    - Entries with a non-null ``taxonomy`` (and no ``domain``) are mapped: ``taxonomy``
      becomes ``domain``, ``description`` becomes ``name``
    - Missing ``slug``/``description`` become empty strings

    Returns a new list; order is preserved.
    """
    result: List[Any] = []
    for term in terms:
        if isinstance(term, dict) and term.get("domain") is None and term.get("taxonomy") is not None:
            term = {
                "domain": term["taxonomy"],
                "slug": term.get("slug") if term.get("slug") is not None else "",
                "name": term.get("description") if term.get("description") is not None else "",
            }
        result.append(term)
    return result
