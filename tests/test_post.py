# tests/test_post.py
from __future__ import annotations

import unittest
from datetime import datetime, timezone

from crosspost.post import EPOCH, Post


class TestPost(unittest.TestCase):
    def test_identity_is_exact_url(self) -> None:
        a = Post(id="1", original_url="https://example.com/a", votes=3)
        b = Post(id="xyz", original_url="https://example.com/a", votes=99)
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))

    def test_identity_is_case_sensitive_and_untrimmed(self) -> None:
        base = Post(original_url="https://example.com/a")
        self.assertNotEqual(base, Post(original_url="https://example.com/A"))
        self.assertNotEqual(base, Post(original_url="https://example.com/a/"))
        self.assertNotEqual(base, Post(original_url=" https://example.com/a"))

    def test_orders_by_url_only(self) -> None:
        early = datetime(2020, 1, 1, tzinfo=timezone.utc)
        late = datetime(2021, 1, 1, tzinfo=timezone.utc)
        posts = [
            Post(original_url="https://c.example", submit_timestamp=early),
            Post(original_url="https://a.example", submit_timestamp=late),
            Post(original_url="https://b.example"),
        ]
        self.assertEqual(
            [p.original_url for p in sorted(posts)],
            ["https://a.example", "https://b.example", "https://c.example"],
        )

    def test_defaults(self) -> None:
        post = Post(original_url="https://example.com")
        self.assertEqual(post.votes, 0)
        self.assertEqual(post.comment_count, 0)
        self.assertEqual(post.submitter, "")
        self.assertEqual(post.submit_timestamp, EPOCH)
        self.assertEqual(post.epoch_seconds, 0)

    def test_format_utc(self) -> None:
        post = Post(
            original_url="https://example.com",
            submit_timestamp=datetime.fromtimestamp(1609074256, tz=timezone.utc),
        )
        self.assertEqual(post.format_utc(), "2020-12-27T13:04:16 +0000")
        self.assertIn("original_url: https://example.com;", post.describe())


if __name__ == "__main__":
    unittest.main()
