from __future__ import annotations

from typing import Any, Dict, Union

from pydantic import BaseModel, ConfigDict


class Entity(BaseModel):
    """One flat record read from a WXR document.

    ``type`` is a tag such as ``post``, ``comment_meta`` or ``wxr_version``;
    ``data`` is an ordered mapping of field name to scalar or list.  A
    ``wxr_version`` entity may also carry the bare version string.
    """

    model_config = ConfigDict(frozen=True)

    type: str
    data: Union[Dict[str, Any], str, int, float, None] = None
