from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping, Protocol

from .config_schema import ID_PLACEHOLDER, PAGE_PLACEHOLDER, AppConfig
from .errors import FetchError
from .fetcher import JsonFetcher
from .normalize import post_from_forum_item, post_from_news_item
from .post import Post
from .run_log import RunLogger

Listing = Literal["top", "new"]

FORUM_NAME = "Lobsters"
NEWS_NAME = "HackerNews"


class StorySource(Protocol):
    name: str

    def list_targets(self, fetcher: JsonFetcher) -> list[str]: ...

    def parse(self, raw: Any, *, logger: RunLogger | None = None) -> list[Post]: ...


def _log_skip(logger: RunLogger | None, source: str, reason: str, item: Any) -> None:
    if logger is None:
        return
    ref = None
    if isinstance(item, Mapping):
        ref = item.get("short_id") or item.get("id")
    logger.debug("item_skipped", source=source, reason=reason, item=ref)


@dataclass(frozen=True)
class ForumSource:
    """Paged listing: N page URLs, each returning a JSON array of stories."""

    base_url: str
    path_template: str
    pages: int
    comment_base_url: str
    name: str = FORUM_NAME

    def list_targets(self, fetcher: JsonFetcher | None = None) -> list[str]:
        return [
            self.base_url + self.path_template.replace(PAGE_PLACEHOLDER, str(page))
            for page in range(1, self.pages + 1)
        ]

    def parse(self, raw: Any, *, logger: RunLogger | None = None) -> list[Post]:
        posts: list[Post] = []
        if not isinstance(raw, list):
            return posts

        for page in raw:
            if not isinstance(page, list):
                _log_skip(logger, self.name, "page_not_a_list", None)
                continue

            for item in page:
                if not isinstance(item, Mapping):
                    _log_skip(logger, self.name, "item_not_an_object", None)
                    continue

                try:
                    post = post_from_forum_item(item, comment_base_url=self.comment_base_url)
                except ValueError:
                    _log_skip(logger, self.name, "bad_timestamp", item)
                    continue

                if post is None:
                    _log_skip(logger, self.name, "missing_url", item)
                    continue
                posts.append(post)

        return posts


@dataclass(frozen=True)
class NewsSource:
    """Id listing plus one request per item id, capped at max_stories."""

    base_url: str
    ids_path: str
    item_path_template: str
    max_stories: int
    item_view_url: str
    name: str = NEWS_NAME

    @property
    def ids_url(self) -> str:
        return self.base_url + self.ids_path

    def list_targets(self, fetcher: JsonFetcher) -> list[str]:
        ids = fetcher.fetch_one(self.ids_url)
        if not isinstance(ids, list):
            raise FetchError(self.ids_url, "decode", "expected a JSON array of item ids")

        targets: list[str] = []
        for raw_id in ids:
            if len(targets) >= self.max_stories:
                break
            if isinstance(raw_id, bool) or not isinstance(raw_id, int):
                continue
            targets.append(
                self.base_url + self.item_path_template.replace(ID_PLACEHOLDER, str(raw_id))
            )
        return targets

    def parse(self, raw: Any, *, logger: RunLogger | None = None) -> list[Post]:
        posts: list[Post] = []
        if not isinstance(raw, list):
            return posts

        for item in raw:
            # Deleted items come back as JSON null.
            if not isinstance(item, Mapping):
                _log_skip(logger, self.name, "item_not_an_object", None)
                continue

            try:
                post = post_from_news_item(item, item_view_url=self.item_view_url)
            except ValueError:
                _log_skip(logger, self.name, "bad_timestamp", item)
                continue

            if post is None:
                _log_skip(logger, self.name, "not_a_story_with_url", item)
                continue
            posts.append(post)

        return posts


def build_sources(config: AppConfig, listing: Listing) -> tuple[ForumSource, NewsSource]:
    if listing not in ("top", "new"):
        raise ValueError(f"unknown listing: {listing!r}")

    forum_cfg = config.forum
    news_cfg = config.news

    forum = ForumSource(
        base_url=forum_cfg.base_url,
        path_template=forum_cfg.top_path if listing == "top" else forum_cfg.new_path,
        pages=forum_cfg.pages,
        comment_base_url=forum_cfg.comment_base_url,
    )
    news = NewsSource(
        base_url=news_cfg.base_url,
        ids_path=news_cfg.top_ids_path if listing == "top" else news_cfg.new_ids_path,
        item_path_template=news_cfg.item_path,
        max_stories=news_cfg.max_stories,
        item_view_url=news_cfg.item_view_url,
    )
    return forum, news
