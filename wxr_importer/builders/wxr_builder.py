"""
Aggregate builder for WXR entity streams.

A WXR document is read as a flat sequence of entities in document order.
Metadata and comments carry no usable link to their parent: they always
follow it, so each one is attached to the most recently appended parent of
the right kind (the last post, that post's last comment, or the last
category/tag/term).  The ``post_id``/``comment_id`` fields they carry are
dropped.

Usage example::

    from wxr_importer.extractors.entity_reader import iter_wxr_entities
    from wxr_importer.builders.wxr_builder import build_import

    export = build_import(iter_wxr_entities("export.xml"))
    print(export.version, len(export.posts))

Every build starts from empty collections.  After the stream is exhausted
the inline post terms are normalized and the version marker is checked;
a bad marker fails the whole build.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from wxr_importer.models.aggregate import WXRImport
from wxr_importer.models.entity import Entity
from wxr_importer.utils.errors import WXRParseError
from wxr_importer.utils.terms import TERM_ENTITY_TYPES, TermSource, normalize_post_terms


class _BuildState:
    """Collections and cursors owned by a single build call."""

    def __init__(self) -> None:
        self.authors: Dict[str, Dict[str, Any]] = {}
        self.posts: List[Dict[str, Any]] = []
        self.categories: List[Dict[str, Any]] = []
        self.tags: List[Dict[str, Any]] = []
        self.terms: List[Dict[str, Any]] = []
        self.base_url: Any = ""
        self.base_blog_url: Any = ""
        self.version: Any = ""
        # Most recently appended category, tag or term entry.
        self.last_term: Optional[Dict[str, Any]] = None

    @property
    def last_post(self) -> Optional[Dict[str, Any]]:
        return self.posts[-1] if self.posts else None


class WXRBuilder:
    """
    Consume an entity stream and assemble a :class:`WXRImport`.

    The builder holds no state between calls to :meth:`build` other than
    :attr:`ignored`, which counts the entities dropped by the last build
    (unknown types and metadata without a parent) keyed by entity type.
    """

    def __init__(self) -> None:
        self.ignored: Counter = Counter()

    def build(self, entities: Iterable[Entity]) -> WXRImport:
        """Build the aggregate from ``entities``.

        :param entities: Entities in document order.
        :return: The assembled export.
        :raises WXRParseError: If the stream fails while being read, or if
            no valid version marker was seen once it is exhausted.
        """
        self.ignored = Counter()
        state = _BuildState()
        iterator = iter(entities)
        while True:
            try:
                entity = next(iterator)
            except StopIteration:
                break
            except Exception as e:
                raise WXRParseError(str(e)) from e
            self._route(state, entity)

        for post in state.posts:
            if isinstance(post.get("terms"), list):
                post["terms"] = normalize_post_terms(post["terms"])

        try:
            return WXRImport(
                authors=state.authors,
                posts=state.posts,
                categories=state.categories,
                tags=state.tags,
                terms=state.terms,
                base_url=state.base_url,
                base_blog_url=state.base_blog_url,
                version=state.version,
            )
        except ValidationError as e:
            # only the version field can fail validation here
            raise WXRParseError.invalid_version() from e

    # Routing ---------------------------------------------------------------

    def _route(self, state: _BuildState, entity: Entity) -> None:
        entity_type = entity.type
        if entity_type == "wxr_version":
            self._on_wxr_version(state, entity)
            return
        if entity_type in TERM_ENTITY_TYPES:
            self._on_term(state, TermSource.for_entity_type(entity_type), entity)
            return

        handler = self._handlers.get(entity_type)
        if handler is None or not isinstance(entity.data, dict):
            self.ignored[entity_type] += 1
            return
        handler(self, state, dict(entity.data))

    def _on_wxr_version(self, state: _BuildState, entity: Entity) -> None:
        if isinstance(entity.data, dict):
            if "wxr_version" in entity.data:
                state.version = entity.data["wxr_version"]
            else:
                self.ignored["wxr_version"] += 1
        else:
            state.version = entity.data

    def _on_site_option(self, state: _BuildState, data: Dict[str, Any]) -> None:
        name = data.get("option_name")
        value = data.get("option_value")
        if name is None or value is None:
            return
        if name == "wxr_version":
            state.version = value
        elif name == "siteurl":
            state.base_url = value
        elif name == "home":
            state.base_blog_url = value

    def _on_user(self, state: _BuildState, data: Dict[str, Any]) -> None:
        for field in ("author_login", "author_email", "author_id"):
            if data.get(field) is not None:
                key = str(data[field])
                break
        else:
            key = str(len(state.authors))
        state.authors[key] = data

    def _on_post(self, state: _BuildState, data: Dict[str, Any]) -> None:
        state.posts.append(data)

    def _on_post_meta(self, state: _BuildState, data: Dict[str, Any]) -> None:
        post = state.last_post
        if post is None:
            self.ignored["post_meta"] += 1
            return
        data.pop("post_id", None)
        post.setdefault("postmeta", []).append(data)

    def _on_comment(self, state: _BuildState, data: Dict[str, Any]) -> None:
        post = state.last_post
        if post is None:
            self.ignored["comment"] += 1
            return
        data["commentmeta"] = []
        post.setdefault("comments", []).append(data)

    def _on_comment_meta(self, state: _BuildState, data: Dict[str, Any]) -> None:
        post = state.last_post
        comments = post.get("comments") if post is not None else None
        if not comments:
            self.ignored["comment_meta"] += 1
            return
        data.pop("comment_id", None)
        comments[-1].setdefault("commentmeta", []).append(data)

    def _on_term(self, state: _BuildState, source: TermSource, entity: Entity) -> None:
        if not isinstance(entity.data, dict):
            self.ignored[entity.type] += 1
            return
        entry = source.make_entry(entity.data)
        getattr(state, source.collection).append(entry)
        state.last_term = entry

    def _on_term_meta(self, state: _BuildState, data: Dict[str, Any]) -> None:
        if state.last_term is None:
            self.ignored["termmeta"] += 1
            return
        state.last_term.setdefault("termmeta", []).append(data)

    _handlers = {
        "site_option": _on_site_option,
        "user": _on_user,
        "post": _on_post,
        "post_meta": _on_post_meta,
        "comment": _on_comment,
        "comment_meta": _on_comment_meta,
        "termmeta": _on_term_meta,
        "term_meta": _on_term_meta,
    }


def build_import(entities: Iterable[Entity]) -> WXRImport:
    """Build a :class:`WXRImport` from ``entities`` with a fresh builder."""
    return WXRBuilder().build(entities)
