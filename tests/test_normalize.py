# tests/test_normalize.py
from __future__ import annotations

import unittest
from datetime import timezone

from crosspost.normalize import (
    parse_epoch_timestamp,
    parse_forum_timestamp,
    post_from_forum_item,
    post_from_news_item,
)

_COMMENT_BASE = "https://lobste.rs/s"
_ITEM_VIEW = "https://news.ycombinator.com/item?id="


class TestForumTimestamp(unittest.TestCase):
    def test_applies_embedded_offset(self) -> None:
        ts = parse_forum_timestamp("2020-12-27T06:58:40.000-06:00")
        self.assertEqual(ts.tzinfo, timezone.utc)
        self.assertEqual(int(ts.timestamp()), 1609073920)
        self.assertEqual((ts.hour, ts.minute, ts.second), (12, 58, 40))

    def test_offset_difference_against_epoch(self) -> None:
        ts = parse_forum_timestamp("2020-12-27T06:58:40.000-06:00")
        self.assertEqual(1609074256 - int(ts.timestamp()), 336)

    def test_accepts_colonless_offset_zulu_and_no_fraction(self) -> None:
        expected = 1609073920
        for raw in (
            "2020-12-27T06:58:40.000-0600",
            "2020-12-27T12:58:40Z",
            "2020-12-27T12:58:40.123+00:00",
            "2020-12-27T14:58:40+02:00",
        ):
            with self.subTest(raw=raw):
                self.assertEqual(int(parse_forum_timestamp(raw).timestamp()), expected)

    def test_rejects_bad_strings(self) -> None:
        for raw in (
            "",
            "yesterday",
            "2020-12-27 06:58:40",
            "2020-13-27T06:58:40.000-06:00",
            "0001-01-01T00:00:00.000+05:00",
            5,
        ):
            with self.subTest(raw=raw):
                with self.assertRaises(ValueError):
                    parse_forum_timestamp(raw)


class TestEpochTimestamp(unittest.TestCase):
    def test_converts_epoch(self) -> None:
        self.assertEqual(int(parse_epoch_timestamp(1609074256).timestamp()), 1609074256)

    def test_rejects_out_of_range_and_non_numbers(self) -> None:
        for raw in (10**20, float("inf"), "1609074256", True, None):
            with self.subTest(raw=raw):
                with self.assertRaises(ValueError):
                    parse_epoch_timestamp(raw)


class TestForumItem(unittest.TestCase):
    def test_extracts_fields(self) -> None:
        post = post_from_forum_item(
            {
                "short_id": "4pivy1",
                "created_at": "2020-12-27T06:58:40.000-06:00",
                "title": "Bash HTTP monitoring dashboard",
                "url": "https://raymii.org/s/software/Bash_HTTP_Monitoring_Dashboard.html",
                "score": 30,
                "comment_count": 2,
                "comments_url": "https://lobste.rs/s/4pivy1/bash_http_monitoring_dashboard",
                "submitter_user": {"username": "raymii", "karma": 7351},
            },
            comment_base_url=_COMMENT_BASE,
        )
        assert post is not None
        self.assertEqual(post.id, "4pivy1")
        self.assertEqual(post.votes, 30)
        self.assertEqual(post.comment_count, 2)
        self.assertEqual(post.submitter, "raymii")
        self.assertEqual(post.comment_url, "https://lobste.rs/s/4pivy1/bash_http_monitoring_dashboard")
        self.assertEqual(post.epoch_seconds, 1609073920)

    def test_builds_comment_url_and_defaults_counts(self) -> None:
        post = post_from_forum_item(
            {"short_id": "abc123", "url": "https://example.com/x"},
            comment_base_url=_COMMENT_BASE,
        )
        assert post is not None
        self.assertEqual(post.comment_url, "https://lobste.rs/s/abc123")
        self.assertEqual(post.votes, 0)
        self.assertEqual(post.comment_count, 0)
        self.assertEqual(post.submitter, "")

    def test_returns_none_without_url(self) -> None:
        self.assertIsNone(post_from_forum_item({"short_id": "x"}, comment_base_url=_COMMENT_BASE))

    def test_bad_timestamp_raises(self) -> None:
        with self.assertRaises(ValueError):
            post_from_forum_item(
                {"url": "https://example.com", "created_at": "not a date"},
                comment_base_url=_COMMENT_BASE,
            )


class TestNewsItem(unittest.TestCase):
    def test_extracts_fields(self) -> None:
        post = post_from_news_item(
            {
                "by": "todsacerdoti",
                "descendants": 26,
                "id": 25550732,
                "score": 154,
                "time": 1609074256,
                "title": "Bash HTTP Monitoring Dashboard",
                "type": "story",
                "url": "https://raymii.org/s/software/Bash_HTTP_Monitoring_Dashboard.html",
            },
            item_view_url=_ITEM_VIEW,
        )
        assert post is not None
        self.assertEqual(post.id, "25550732")
        self.assertEqual(post.comment_url, "https://news.ycombinator.com/item?id=25550732")
        self.assertEqual(post.votes, 154)
        self.assertEqual(post.comment_count, 26)
        self.assertEqual(post.submitter, "todsacerdoti")
        self.assertEqual(post.epoch_seconds, 1609074256)

    def test_skips_non_stories_and_missing_urls(self) -> None:
        self.assertIsNone(
            post_from_news_item({"type": "job", "url": "https://x"}, item_view_url=_ITEM_VIEW)
        )
        self.assertIsNone(post_from_news_item({"type": "story", "id": 1}, item_view_url=_ITEM_VIEW))
        self.assertIsNone(post_from_news_item({"url": "https://x"}, item_view_url=_ITEM_VIEW))


if __name__ == "__main__":
    unittest.main()
