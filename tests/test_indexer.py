"""Tests for pageplan.services.indexer.build_index."""

import logging
from datetime import date, datetime, timezone

from pageplan.errors import DUPLICATE_SLUG, INVALID_FIELD, MISSING_REQUIRED_FIELD
from pageplan.models.content import RawRecord
from pageplan.services.indexer import build_index, parse_timestamp, sort_items


def _record(slug, published, **kwargs) -> dict:
    return {"slug": slug, "title": slug.upper() if slug else None, "published": published, **kwargs}


def _slugs(items):
    return [item.slug for item in items]


class TestBuildIndexOrdering:
    def test_sorts_newest_first(self):
        items, warnings = build_index(
            [
                _record("a", "2020-01-01"),
                _record("b", "2020-02-01"),
                _record("c", "2020-03-01"),
            ]
        )
        assert _slugs(items) == ["c", "b", "a"]
        assert warnings == []

    def test_identical_timestamps_sorted_by_slug(self):
        items, _ = build_index(
            [
                _record("zeta", "2021-05-05T10:00:00"),
                _record("alpha", "2021-05-05T10:00:00"),
                _record("mid", "2021-05-05T10:00:00"),
            ]
        )
        assert _slugs(items) == ["alpha", "mid", "zeta"]

    def test_accepts_raw_record_instances_and_aliases(self):
        items, _ = build_index(
            [
                RawRecord(slug="x", published=date(2019, 1, 1)),
                {"slug": "y", "publishedAt": "2019-06-01T00:00:00Z"},
                {"slug": "z", "published_at": datetime(2019, 3, 1)},
            ]
        )
        assert _slugs(items) == ["y", "z", "x"]
        assert all(item.published_at.tzinfo is not None for item in items)


class TestBuildIndexFiltering:
    def test_drafts_are_dropped_silently(self):
        items, warnings = build_index(
            [_record("live", "2020-01-01"), _record("wip", "2020-02-01", draft=True)]
        )
        assert _slugs(items) == ["live"]
        assert warnings == []

    def test_non_post_types_are_dropped(self):
        items, warnings = build_index(
            [_record("post", "2020-01-01", type="post"), _record("about", "2020-01-01", type="page")]
        )
        assert _slugs(items) == ["post"]
        assert warnings == []

    def test_missing_published_is_excluded_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            items, warnings = build_index(
                [
                    _record("a", "2020-01-01"),
                    {"slug": "undated", "title": "Undated"},
                    _record("b", "2020-02-01"),
                ]
            )
        assert _slugs(items) == ["b", "a"]
        assert len(warnings) == 1
        assert warnings[0].kind == MISSING_REQUIRED_FIELD
        assert "undated" in warnings[0].message
        assert warnings[0].records[0]["slug"] == "undated"
        assert "undated" in caplog.text

    def test_missing_slug_is_derived_from_title(self):
        items, warnings = build_index(
            [{"title": "9 ways to write better Code", "published": "2020-01-01"}]
        )
        assert _slugs(items) == ["9-ways-to-write-better-code"]
        assert warnings == []

    def test_missing_slug_and_title_is_excluded(self):
        items, warnings = build_index([{"published": "2020-01-01"}])
        assert items == []
        assert warnings[0].kind == MISSING_REQUIRED_FIELD

    def test_unparsable_date_is_excluded(self):
        items, warnings = build_index([_record("bad", "not a date")])
        assert items == []
        assert warnings[0].kind == INVALID_FIELD
        assert "bad" in warnings[0].message

    def test_malformed_record_is_quarantined(self):
        items, warnings = build_index(
            [_record("ok", "2020-01-01"), {"slug": "broken", "published": "2020-01-01", "draft": "maybe"}]
        )
        assert _slugs(items) == ["ok"]
        assert warnings[0].kind == INVALID_FIELD
        assert warnings[0].records[0]["slug"] == "broken"


class TestBuildIndexDuplicates:
    def test_later_published_duplicate_wins(self):
        items, warnings = build_index(
            [
                _record("dup", "2020-01-01", title="Old"),
                _record("dup", "2021-01-01", title="New"),
            ]
        )
        assert len(items) == 1
        assert items[0].title == "New"
        assert warnings[0].kind == DUPLICATE_SLUG
        assert {r["title"] for r in warnings[0].records} == {"Old", "New"}

    def test_winner_does_not_depend_on_input_order(self):
        first = _record("dup", "2020-01-01", title="B")
        second = _record("dup", "2020-01-01", title="A")
        items_ab, _ = build_index([first, second])
        items_ba, _ = build_index([second, first])
        assert items_ab[0].title == items_ba[0].title == "A"

    def test_winner_is_stable_when_date_and_title_match(self):
        first = _record("dup", "2020-01-01", title="Same", tags=["x"])
        second = _record("dup", "2020-01-01", title="Same", tags=["y"])
        items_ab, _ = build_index([first, second])
        items_ba, _ = build_index([second, first])
        assert items_ab[0].tags == items_ba[0].tags

    def test_slugs_differing_only_in_case_are_duplicates(self):
        items, warnings = build_index(
            [
                {"slug": "Hello-World", "title": "Old", "published": "2020-01-01"},
                {"slug": "hello-world", "title": "New", "published": "2020-02-01"},
            ]
        )
        assert _slugs(items) == ["hello-world"]
        assert items[0].title == "New"
        assert [w.kind for w in warnings] == [DUPLICATE_SLUG]

    def test_declared_slug_is_lower_cased(self):
        items, _ = build_index([{"slug": "My_Post", "published": "2020-01-01"}])
        assert _slugs(items) == ["my-post"]


class TestContentItemNormalisation:
    def test_tags_deduplicated_in_declaration_order(self):
        items, _ = build_index([_record("t", "2020-01-01", tags=["vue", "react", "vue"])])
        assert items[0].tags == ("vue", "react")

    def test_comma_separated_tags(self):
        items, _ = build_index([_record("t", "2020-01-01", tags="javascript, closure")])
        assert items[0].tags == ("javascript", "closure")

    def test_description_markup_is_stripped(self):
        items, _ = build_index(
            [_record("d", "2020-01-01", description="<p>All about <b>this</b></p>")]
        )
        assert "<" not in items[0].description
        assert "this" in items[0].description

    def test_unknown_recommended_slugs_are_dropped(self):
        items, _ = build_index(
            [
                _record("a", "2020-01-01", recommended=["b", "ghost"]),
                _record("b", "2020-02-01"),
            ]
        )
        by_slug = {item.slug: item for item in items}
        assert by_slug["a"].recommended == ("b",)

    def test_unparsable_modified_date_is_ignored(self):
        items, warnings = build_index([_record("m", "2020-01-01", modified="yesterday")])
        assert items[0].modified_at is None
        assert warnings == []


class TestHelpers:
    def test_parse_timestamp_naive_is_utc(self):
        assert parse_timestamp("2020-01-01") == datetime(2020, 1, 1, tzinfo=timezone.utc)

    def test_sort_items_is_stable_for_ties(self):
        items, _ = build_index([_record("b", "2020-01-01"), _record("a", "2020-01-01")])
        assert _slugs(sort_items(list(reversed(items)))) == ["a", "b"]
