from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Mapping

from .post import EPOCH, Post

# 2020-12-27T06:58:40.000-06:00; fractional part optional, offset with or without colon.
_FORUM_TIMESTAMP_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.\d+)?(Z|[+-]\d{2}:?\d{2})$"
)


def _coerce_str(value: Any) -> str:
    if isinstance(value, str):
        return value
    return ""


def _coerce_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    return 0


def _coerce_id(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return ""


def _item_url(item: Mapping[str, Any]) -> str | None:
    url = item.get("url")
    if not isinstance(url, str) or not url:
        return None
    return url


def parse_forum_timestamp(value: Any) -> datetime:
    """
    Parse a forum `created_at` string into an aware UTC datetime.

    Sub-second precision is dropped and the offset embedded in the string is
    applied; the machine's local zone never enters the calculation.
    Raises ValueError when the string does not match the expected shape.
    """
    if not isinstance(value, str):
        raise ValueError(f"timestamp must be a string, got {type(value).__name__}")

    match = _FORUM_TIMESTAMP_RE.fullmatch(value.strip())
    if match is None:
        raise ValueError(f"unrecognized timestamp: {value!r}")

    base, offset = match.groups()
    offset = "+0000" if offset == "Z" else offset.replace(":", "")

    parsed = datetime.strptime(base + offset, "%Y-%m-%dT%H:%M:%S%z")
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError as e:
        raise ValueError(f"timestamp out of range: {value!r}") from e


def parse_epoch_timestamp(value: Any) -> datetime:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"epoch timestamp must be a number, got {type(value).__name__}")
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (OverflowError, OSError) as e:
        raise ValueError(f"epoch timestamp out of range: {value!r}") from e


def post_from_forum_item(item: Mapping[str, Any], *, comment_base_url: str) -> Post | None:
    """
    Build a Post from one forum listing item.

    Returns None for items without a URL. Raises ValueError when `created_at`
    is present but unparseable; callers drop such items.
    """
    url = _item_url(item)
    if url is None:
        return None

    short_id = _coerce_id(item.get("short_id"))

    comment_url = _coerce_str(item.get("comments_url"))
    if not comment_url and short_id:
        comment_url = f"{comment_base_url}/{short_id}"

    submitter = ""
    user = item.get("submitter_user")
    if isinstance(user, Mapping):
        submitter = _coerce_str(user.get("username"))
    elif isinstance(user, str):
        # Older API responses inline the username.
        submitter = user

    submitted = EPOCH
    if "created_at" in item:
        submitted = parse_forum_timestamp(item.get("created_at"))

    return Post(
        id=short_id,
        submit_timestamp=submitted,
        title=_coerce_str(item.get("title")),
        original_url=url,
        submitter=submitter,
        comment_url=comment_url,
        votes=_coerce_int(item.get("score")),
        comment_count=_coerce_int(item.get("comment_count")),
    )


def post_from_news_item(item: Mapping[str, Any], *, item_view_url: str) -> Post | None:
    """
    Build a Post from one news item object.

    Only `type == "story"` items with a URL are kept (Ask HN posts carry no url).
    The `time` field is already a UTC epoch.
    """
    if item.get("type") != "story":
        return None

    url = _item_url(item)
    if url is None:
        return None

    post_id = _coerce_id(item.get("id"))

    submitted = EPOCH
    if "time" in item:
        submitted = parse_epoch_timestamp(item.get("time"))

    return Post(
        id=post_id,
        submit_timestamp=submitted,
        title=_coerce_str(item.get("title")),
        original_url=url,
        submitter=_coerce_str(item.get("by")),
        comment_url=f"{item_view_url}{post_id}" if post_id else "",
        votes=_coerce_int(item.get("score")),
        comment_count=_coerce_int(item.get("descendants")),
    )
