import io
import xml.etree.ElementTree as ET

import requests

from wxr_importer.models.entity import Entity
from wxr_importer.utils.errors import WXRReadError

CONTENT_NS = "http://purl.org/rss/1.0/modules/content/"
DC_NS = "http://purl.org/dc/elements/1.1/"

# Non-wp children of <item> kept on the post, with their field names.
_ITEM_FIELDS = {
    "title": "post_title",
    "link": "link",
    "guid": "guid",
    (DC_NS, "creator"): "post_author",
    (CONTENT_NS, "encoded"): "post_content",
}

_CHANNEL_OPTIONS = {
    "base_site_url": "siteurl",
    "base_blog_url": "home",
}

_CHANNEL_RSS_OPTIONS = {
    "title": "blogname",
    "description": "blogdescription",
}


def _split_tag(tag):
    """Return ``(namespace, local_name)`` for an ElementTree tag."""
    if tag.startswith("{"):
        ns, _, local = tag[1:].partition("}")
        return ns, local
    return "", tag


def _is_wp_ns(ns):
    # WXR 1.0, 1.1 and 1.2 all live under http://wordpress.org/export/<version>/
    return ns.startswith("http://wordpress.org/export/") and "excerpt" not in ns


def _is_excerpt_ns(ns):
    return ns.startswith("http://wordpress.org/export/") and "excerpt" in ns


def _text(element):
    return element.text if element.text is not None else ""


def _meta_fields(element):
    """Map a <wp:postmeta>/<wp:commentmeta>/<wp:termmeta> element to ``{key, value}``."""
    data = {}
    for child in element:
        _, local = _split_tag(child.tag)
        if local == "meta_key":
            data["key"] = _text(child)
        elif local == "meta_value":
            data["value"] = _text(child)
    return data


def _term_entities(element, entity_type):
    """Analisa um <wp:category>, <wp:tag> ou <wp:term> e seus <wp:termmeta>.

    O termo é emitido primeiro e os metadados em seguida, na ordem do
    documento.
    """
    data = {}
    meta = []
    if entity_type == "category":
        data["taxonomy"] = "category"
    elif entity_type == "tag":
        data["taxonomy"] = "post_tag"
    for child in element:
        _, local = _split_tag(child.tag)
        if local == "termmeta":
            meta.append(_meta_fields(child))
        elif entity_type == "term" and local == "term_taxonomy":
            data["taxonomy"] = _text(child)
        elif entity_type == "term" and local == "term_slug":
            data["slug"] = _text(child)
        else:
            data[local] = _text(child)
    yield Entity(type=entity_type, data=data)
    for item in meta:
        yield Entity(type="termmeta", data=item)


def _comment_entities(element):
    data = {}
    meta = []
    for child in element:
        _, local = _split_tag(child.tag)
        if local == "commentmeta":
            meta.append(_meta_fields(child))
        else:
            data[local] = _text(child)
    yield Entity(type="comment", data=data)
    for item in meta:
        item["comment_id"] = data.get("comment_id")
        yield Entity(type="comment_meta", data=item)


def _item_entities(element):
    """Emit the post for an <item>, then its postmeta, comments and commentmeta."""
    data = {}
    terms = []
    postmeta = []
    comments = []
    for child in element:
        ns, local = _split_tag(child.tag)
        if _is_wp_ns(ns):
            if local == "postmeta":
                postmeta.append(_meta_fields(child))
            elif local == "comment":
                comments.append(child)
            else:
                data[local] = _text(child)
        elif _is_excerpt_ns(ns) and local == "encoded":
            data["post_excerpt"] = _text(child)
        elif not ns and local == "category":
            terms.append(
                {
                    "taxonomy": child.get("domain", ""),
                    "slug": child.get("nicename", ""),
                    "description": _text(child),
                }
            )
        else:
            field = _ITEM_FIELDS.get((ns, local) if ns else local)
            if field:
                data[field] = _text(child)
    if terms:
        data["terms"] = terms
    yield Entity(type="post", data=data)
    for item in postmeta:
        item["post_id"] = data.get("post_id")
        yield Entity(type="post_meta", data=item)
    for comment in comments:
        yield from _comment_entities(comment)


def _open_source(source, timeout):
    """Return something ``ET.iterparse`` can read for a path, file object or URL."""
    if isinstance(source, str) and source.startswith(("http://", "https://")):
        try:
            response = requests.get(source, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise WXRReadError(f"Could not download {source}: {e}") from e
        return io.BytesIO(response.content)
    return source


def iter_wxr_entities(source, *, timeout=30):
    """Read a WXR document and yield its entities in document order.

    Channel-level values (version, site URLs, title) are emitted as soon as
    they close.  Authors, terms and items are emitted once their element is
    complete, parent first and children after it, and the element is then
    cleared so memory stays bounded by the largest single item.

    Args:
        source: A filesystem path, a binary file object or an ``http(s)://`` URL.
        timeout (int): Seconds to wait for a remote download.

    Yields:
        Entity: One entity per record, in document order.

    Raises:
        WXRReadError: If the document is not well-formed XML or cannot be
            downloaded.
    """
    stream = _open_source(source, timeout)
    path = []
    try:
        for event, element in ET.iterparse(stream, events=("start", "end")):
            ns, local = _split_tag(element.tag)
            if event == "start":
                path.append(local)
                continue
            path.pop()
            parent = path[-1] if path else None

            if parent == "channel":
                if _is_wp_ns(ns):
                    if local == "wxr_version":
                        yield Entity(type="wxr_version", data={"wxr_version": _text(element)})
                    elif local in _CHANNEL_OPTIONS:
                        yield Entity(
                            type="site_option",
                            data={"option_name": _CHANNEL_OPTIONS[local], "option_value": _text(element)},
                        )
                    elif local == "author":
                        yield Entity(
                            type="user",
                            data={_split_tag(child.tag)[1]: _text(child) for child in element},
                        )
                    elif local in ("category", "tag", "term"):
                        yield from _term_entities(element, local)
                    else:
                        continue
                elif not ns and local == "item":
                    yield from _item_entities(element)
                elif not ns and local in _CHANNEL_RSS_OPTIONS:
                    yield Entity(
                        type="site_option",
                        data={"option_name": _CHANNEL_RSS_OPTIONS[local], "option_value": _text(element)},
                    )
                else:
                    continue
                element.clear()
    except ET.ParseError as e:
        raise WXRReadError(f"Malformed WXR document: {e}") from e
