import os
import sys

# Ensure project root is on sys.path for imports when running tests directly
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest

from wxr_importer.builders.wxr_builder import WXRBuilder, build_import
from wxr_importer.models.entity import Entity
from wxr_importer.utils.errors import WXRParseError, WXRReadError


def E(entity_type, data=None):
    return Entity(type=entity_type, data=data if data is not None else {})


def version(value="1.2"):
    return E("wxr_version", {"wxr_version": value})


def test_end_to_end_scenario():
    stream = [
        version("1.1"),
        E("user", {"author_login": "jane"}),
        E("category", {"term_id": "3", "taxonomy": "category", "term_description": "d"}),
        E("post", {"post_title": "Hi"}),
        E("post_meta", {"key": "k", "value": "v"}),
        E("comment", {"comment_author": "bob"}),
        E("comment_meta", {"key": "ck", "value": "cv"}),
    ]
    result = build_import(stream)

    assert result.version == "1.1"
    assert list(result.authors) == ["jane"]
    assert result.authors["jane"] == {"author_login": "jane"}
    assert result.categories == [{"term_id": 3}]
    assert result.posts == [
        {
            "post_title": "Hi",
            "postmeta": [{"key": "k", "value": "v"}],
            "comments": [{"comment_author": "bob", "commentmeta": [{"key": "ck", "value": "cv"}]}],
        }
    ]
    assert result.tags == [] and result.terms == []
    assert result.base_url == "" and result.base_blog_url == ""


def test_version_from_bare_scalar_payload():
    assert build_import([E("wxr_version", "1.0")]).version == "1.0"


def test_version_from_site_option_overrides_earlier_version():
    stream = [
        version("1.1"),
        E("site_option", {"option_name": "wxr_version", "option_value": "1.2"}),
    ]
    assert build_import(stream).version == "1.2"


def test_site_options_set_base_urls_and_ignore_others():
    stream = [
        version(),
        E("site_option", {"option_name": "siteurl", "option_value": "http://example.com"}),
        E("site_option", {"option_name": "home", "option_value": "http://example.com/blog"}),
        E("site_option", {"option_name": "blogname", "option_value": "Example"}),
        E("site_option", {"option_name": "siteurl"}),
    ]
    result = build_import(stream)
    assert result.base_url == "http://example.com"
    assert result.base_blog_url == "http://example.com/blog"


@pytest.mark.parametrize("bad", ["abc", "", "1", "1.2.3", "v1.2", "1.2\n", "١.٢", "１.２"])
def test_invalid_version_fails_even_with_data(bad):
    stream = [
        E("wxr_version", {"wxr_version": bad}),
        E("user", {"author_login": "jane"}),
        E("post", {"post_title": "Hi"}),
        E("tag", {"term_id": "1"}),
    ]
    with pytest.raises(WXRParseError) as excinfo:
        build_import(stream)
    assert excinfo.value.reason == "WXR_INVALID_VERSION"
    assert excinfo.value.code == "WXR_parse_error"
    assert "missing/invalid WXR version number" in excinfo.value.message


def test_numeric_bare_version_is_stored_as_text():
    assert build_import([E("wxr_version", 1.2)]).version == "1.2"


def test_missing_version_fails():
    with pytest.raises(WXRParseError) as excinfo:
        build_import([E("post", {"post_title": "Hi"})])
    assert excinfo.value.reason == "WXR_INVALID_VERSION"


def test_postmeta_attaches_to_nearest_preceding_post():
    stream = [
        version(),
        E("post", {"post_title": "A"}),
        E("post_meta", {"key": "k1", "value": "v1", "post_id": "1"}),
        E("post", {"post_title": "B"}),
        E("post_meta", {"key": "k2", "value": "v2", "post_id": "1"}),
    ]
    posts = build_import(stream).posts
    assert posts[0]["postmeta"] == [{"key": "k1", "value": "v1"}]
    assert posts[1]["postmeta"] == [{"key": "k2", "value": "v2"}]


def test_comment_meta_drops_comment_id_and_targets_last_comment():
    stream = [
        version(),
        E("post", {"post_title": "A"}),
        E("comment", {"comment_id": "1"}),
        E("comment", {"comment_id": "2"}),
        E("comment_meta", {"key": "k", "value": "v", "comment_id": "1"}),
    ]
    comments = build_import(stream).posts[0]["comments"]
    assert comments[0]["commentmeta"] == []
    assert comments[1]["commentmeta"] == [{"key": "k", "value": "v"}]


def test_orphan_metadata_is_dropped_and_counted():
    builder = WXRBuilder()
    stream = [
        E("post_meta", {"key": "k", "value": "v"}),
        E("comment", {"comment_author": "bob"}),
        E("comment_meta", {"key": "k", "value": "v"}),
        E("termmeta", {"key": "k", "value": "v"}),
        version(),
        E("post", {"post_title": "A"}),
        E("comment_meta", {"key": "k", "value": "v"}),
    ]
    result = builder.build(stream)
    assert result.posts == [{"post_title": "A"}]
    assert builder.ignored == {"post_meta": 1, "comment": 1, "comment_meta": 2, "termmeta": 1}


def test_unknown_entity_types_are_a_no_op():
    base = [
        version(),
        E("post", {"post_title": "A"}),
        E("post_meta", {"key": "k", "value": "v"}),
        E("category", {"term_id": "2"}),
        E("termmeta", {"key": "color", "value": "red"}),
    ]
    noisy = list(base)
    noisy.insert(2, E("navigation_menu", {"name": "x"}))
    noisy.insert(5, E("something_new", {}))
    noisy.append(E("attachment_blob", {"data": "..."}))

    assert build_import(noisy) == build_import(base)


def test_term_id_is_coerced_to_int():
    stream = [
        version(),
        E("category", {"term_id": "5"}),
        E("tag", {"term_id": 7}),
        E("term", {"term_id": "12abc"}),
    ]
    result = build_import(stream)
    assert result.categories[0]["term_id"] == 5
    assert result.tags[0]["term_id"] == 7
    assert result.terms[0]["term_id"] == 12


def test_legacy_fields_stripped_from_tags_but_kept_on_terms():
    fields = {"term_id": "1", "slug": "x", "taxonomy": "post_tag", "term_description": "desc"}
    result = build_import([version(), E("tag", dict(fields)), E("term", dict(fields))])
    assert result.tags == [{"term_id": 1, "slug": "x"}]
    assert result.terms == [{"term_id": 1, "slug": "x", "taxonomy": "post_tag", "term_description": "desc"}]


def test_termmeta_attaches_to_last_term_across_lists():
    stream = [
        version(),
        E("category", {"term_id": "1"}),
        E("termmeta", {"key": "a", "value": "1"}),
        E("term", {"term_id": "2"}),
        E("term_meta", {"key": "b", "value": "2"}),
        E("tag", {"term_id": "3"}),
        E("termmeta", {"key": "c", "value": "3"}),
        E("termmeta", {"key": "d", "value": "4"}),
    ]
    result = build_import(stream)
    assert result.categories[0]["termmeta"] == [{"key": "a", "value": "1"}]
    assert result.terms[0]["termmeta"] == [{"key": "b", "value": "2"}]
    assert result.tags[0]["termmeta"] == [{"key": "c", "value": "3"}, {"key": "d", "value": "4"}]


def test_author_keys_fall_back_in_order():
    stream = [
        version(),
        E("user", {"author_login": "jane", "author_email": "j@example.com"}),
        E("user", {"author_email": "bob@example.com", "author_id": "9"}),
        E("user", {"author_id": "7"}),
        E("user", {"author_id": "8"}),
        E("user", {"author_display_name": "Anon"}),
    ]
    authors = build_import(stream).authors
    assert list(authors) == ["jane", "bob@example.com", "7", "8", "4"]


def test_same_author_key_is_upserted_in_place():
    stream = [
        version(),
        E("user", {"author_login": "jane", "author_display_name": "Jane"}),
        E("user", {"author_login": "bob"}),
        E("user", {"author_login": "jane", "author_display_name": "Jane D."}),
    ]
    authors = build_import(stream).authors
    assert list(authors) == ["jane", "bob"]
    assert authors["jane"]["author_display_name"] == "Jane D."


def test_inline_post_terms_are_normalized():
    terms = [
        {"taxonomy": "category", "slug": "news", "description": "News"},
        {"taxonomy": "post_tag"},
        {"domain": "category", "slug": "old", "name": "Old"},
    ]
    result = build_import([version(), E("post", {"post_title": "A", "terms": terms})])
    assert result.posts[0]["terms"] == [
        {"domain": "category", "slug": "news", "name": "News"},
        {"domain": "post_tag", "slug": "", "name": ""},
        {"domain": "category", "slug": "old", "name": "Old"},
    ]
    # the entity's own list is left untouched
    assert terms[0] == {"taxonomy": "category", "slug": "news", "description": "News"}


def test_entities_are_not_mutated():
    meta = E("post_meta", {"key": "k", "value": "v", "post_id": "3"})
    category = E("category", {"term_id": "3", "taxonomy": "category"})
    build_import([version(), E("post", {}), meta, category])
    assert meta.data == {"key": "k", "value": "v", "post_id": "3"}
    assert category.data == {"term_id": "3", "taxonomy": "category"}


def test_stream_failure_aborts_build():
    def failing_stream():
        yield version()
        yield E("post", {"post_title": "A"})
        raise WXRReadError("mismatched tag: line 12, column 3")

    with pytest.raises(WXRParseError) as excinfo:
        build_import(failing_stream())
    assert excinfo.value.reason == "WXR_PARSE_ERROR"
    assert "mismatched tag" in str(excinfo.value)


def test_builder_state_is_fresh_for_each_build():
    builder = WXRBuilder()
    first = builder.build([version(), E("post", {"post_title": "A"}), E("unknown", {})])
    second = builder.build([version("1.0")])
    assert len(first.posts) == 1
    assert second.posts == []
    assert second.version == "1.0"
    assert not builder.ignored
