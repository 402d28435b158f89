from __future__ import annotations

import re
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


_VERSION_RE = re.compile(r"[0-9]+\.[0-9]+")


def is_valid_wxr_version(value: Any) -> bool:
    """True when ``value`` looks like ``<ASCII digits>.<ASCII digits>`` (e.g. ``1.2``)."""
    if value is None or isinstance(value, bool):
        return False
    return bool(_VERSION_RE.fullmatch(str(value)))


class WXRImport(BaseModel):
    """The nested result of building a WXR export.

    Authors are keyed by login, email, id or position (in that order of
    preference) and keep insertion order.  Posts own their ``postmeta`` and
    ``comments``; comments own their ``commentmeta``.
    """

    model_config = ConfigDict(extra="forbid")

    authors: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    posts: List[Dict[str, Any]] = Field(default_factory=list)
    categories: List[Dict[str, Any]] = Field(default_factory=list)
    tags: List[Dict[str, Any]] = Field(default_factory=list)
    terms: List[Dict[str, Any]] = Field(default_factory=list)
    base_url: str = ""
    base_blog_url: str = ""
    version: str

    @field_validator("version", mode="before")
    @classmethod
    def _check_version(cls, v: Any):
        if not is_valid_wxr_version(v):
            raise ValueError(f"missing or invalid WXR version number: {v!r}")
        return str(v)

    @field_validator("base_url", "base_blog_url", mode="before")
    @classmethod
    def _stringify_url(cls, v: Any):
        return "" if v is None else str(v)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()
