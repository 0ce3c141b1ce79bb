from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import total_ordering

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S %z"


@total_ordering
@dataclass(frozen=True, eq=False)
class Post:
    """
    A submitted story, normalized from either source.

    Two posts are the same story iff their original_url values are exactly equal;
    ordering is by original_url as well.
    """

    id: str = ""
    submit_timestamp: datetime = field(default=EPOCH)
    title: str = ""
    original_url: str = ""
    submitter: str = ""
    comment_url: str = ""
    votes: int = 0
    comment_count: int = 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Post):
            return NotImplemented
        return self.original_url == other.original_url

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Post):
            return NotImplemented
        return self.original_url < other.original_url

    def __hash__(self) -> int:
        return hash(self.original_url)

    @property
    def epoch_seconds(self) -> int:
        return int(self.submit_timestamp.timestamp())

    def format_utc(self) -> str:
        return self.submit_timestamp.astimezone(timezone.utc).strftime(_DATE_FORMAT)

    def format_local(self) -> str:
        try:
            return self.submit_timestamp.astimezone().strftime(_DATE_FORMAT)
        except (OverflowError, OSError):
            # Local zone cannot represent dates at the edge of the datetime range.
            return self.format_utc()

    def describe(self) -> str:
        return (
            f"id: {self.id}; title: {self.title}; original_url: {self.original_url}; "
            f"submitter: {self.submitter}; comment_url: {self.comment_url}; "
            f"votes: {self.votes}; comment_count: {self.comment_count}; "
            f"date UTC: {self.format_utc()}; date local: {self.format_local()};"
        )
