"""Tests for pageplan.services.feed.build_feed_entries."""

from datetime import datetime, timedelta, timezone

from pageplan.models.config import SiteConfig
from pageplan.models.content import ContentItem
from pageplan.services.feed import build_feed_entries, post_url

_EPOCH = datetime(2020, 1, 1, tzinfo=timezone.utc)


def _items(count: int):
    return [
        ContentItem(slug=f"post-{i}", title=f"Post {i}", published_at=_EPOCH - timedelta(days=i))
        for i in range(count)
    ]


class TestBuildFeedEntries:
    def test_default_limit_truncates_to_thousand(self):
        entries = build_feed_entries(_items(1005), SiteConfig())
        assert len(entries) == 1000
        assert entries[-1].guid == "/post-999/"

    def test_explicit_limit(self):
        entries = build_feed_entries(_items(5), SiteConfig(), limit=2)
        assert [entry.title for entry in entries] == ["Post 0", "Post 1"]

    def test_no_limit_keeps_everything(self):
        entries = build_feed_entries(_items(1005), SiteConfig(), limit=None)
        assert len(entries) == 1005

    def test_author_omitted_when_not_configured(self):
        entries = build_feed_entries(_items(1), SiteConfig())
        assert entries[0].author is None


class TestPostUrl:
    def test_joins_site_url_and_post_path(self):
        config = SiteConfig(site_url="https://example.com/")
        assert post_url("closures", config) == "https://example.com/closures/"
