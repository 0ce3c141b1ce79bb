from __future__ import annotations

from .analyze import CrossPostReport, analyze
from .config_schema import AppConfig
from .fetcher import JsonFetcher
from .offline import forum_sample, news_sample
from .post import Post
from .run_log import RunLogger
from .sources import Listing, StorySource, build_sources


def collect_posts(
    source: StorySource,
    fetcher: JsonFetcher,
    *,
    logger: RunLogger | None = None,
) -> list[Post]:
    """List a source's targets, fetch them as one batch and parse the pages."""
    targets = source.list_targets(fetcher)
    if logger is not None:
        logger.info("batch_started", source=source.name, targets=len(targets))

    try:
        raw = fetcher.fetch_all(targets)
    except Exception as e:
        if logger is not None:
            logger.exception("batch_failed", exc=e, source=source.name)
        raise

    posts = source.parse(raw, logger=logger)
    if logger is not None:
        logger.info(
            "batch_completed",
            source=source.name,
            documents=len(raw),
            posts=len(posts),
        )
    return posts


def run_comparison(
    config: AppConfig,
    listing: Listing,
    *,
    fetcher: JsonFetcher | None = None,
    logger: RunLogger | None = None,
) -> CrossPostReport:
    """
    Fetch both sites for one listing and compare them, Lobsters as side A.

    The two batches run one after the other; any fetch failure aborts the run.
    """
    forum, news = build_sources(config, listing)
    http = fetcher or JsonFetcher(config.http, logger=logger)

    news_posts = collect_posts(news, http, logger=logger)
    forum_posts = collect_posts(forum, http, logger=logger)

    report = analyze(forum_posts, news_posts, name_a=forum.name, name_b=news.name)
    if logger is not None:
        logger.info(
            "comparison_completed",
            listing=listing,
            matches=report.matches,
            first_on_a=report.first_on_a,
            first_on_b=report.first_on_b,
        )
    return report


def run_self_test(config: AppConfig, *, logger: RunLogger | None = None) -> CrossPostReport:
    """Run the fixed offline sample through the same parse and analyze path."""
    forum, news = build_sources(config, "top")

    news_posts = news.parse(news_sample(), logger=logger)
    forum_posts = forum.parse(forum_sample(), logger=logger)

    report = analyze(forum_posts, news_posts, name_a=forum.name, name_b=news.name)
    if logger is not None:
        logger.info("self_test_completed", matches=report.matches)
    return report
