"""
Writers for the outputs of an import run.

:func:`write_aggregate_json` dumps the whole built export so it can be fed to
a downstream importer, and :func:`write_posts_index_csv` writes a flat index
of the posts that is easy to review in a spreadsheet.
"""

from __future__ import annotations

import csv
import json
import os
from typing import Any, Dict, Iterable

from wxr_importer.models.aggregate import WXRImport

POSTS_INDEX_COLUMNS = [
    "post_id",
    "post_type",
    "status",
    "post_name",
    "post_title",
    "link",
    "comments",
    "postmeta",
]


def write_aggregate_json(aggregate: WXRImport, out_path: str) -> str:
    """Write ``aggregate`` as UTF-8 JSON to ``out_path`` and return the path."""
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(aggregate.to_dict(), f, ensure_ascii=False, indent=2)
    return out_path


def write_posts_index_csv(posts: Iterable[Dict[str, Any]], out_path: str) -> str:
    """Write one CSV row per post.

    Parameters
    ----------
    posts:
        Post dictionaries as built by the aggregate builder.
    out_path:
        Location of the CSV file to be written.  The parent directory is
        created automatically.

    Returns
    -------
    str
        The path of the generated CSV file.
    """
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(POSTS_INDEX_COLUMNS)
        for post in posts:
            writer.writerow(
                [
                    post.get("post_id", ""),
                    post.get("post_type", ""),
                    post.get("status", ""),
                    post.get("post_name", ""),
                    post.get("post_title", ""),
                    post.get("link", ""),
                    len(post.get("comments") or []),
                    len(post.get("postmeta") or []),
                ]
            )
    return out_path
