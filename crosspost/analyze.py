from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from .correlate import match_pairs
from .post import Post

NOWHERE = "nowhere"
HOUR_SECONDS = 3600


@dataclass(frozen=True)
class PairAnalysis:
    """Timing and engagement comparison for one story found on both sites."""

    post_a: Post
    post_b: Post
    first_name: str
    second_name: str
    first: Post
    second: Post
    elapsed_seconds: int
    within_hour: bool
    highest_votes: str
    most_comments: str
    same_submitter: bool

    @property
    def title(self) -> str:
        return self.post_a.title

    @property
    def url(self) -> str:
        return self.post_a.original_url


@dataclass(frozen=True)
class CrossPostReport:
    name_a: str
    name_b: str
    count_a: int
    count_b: int
    pairs: Sequence[PairAnalysis] = field(default_factory=tuple)
    first_on_a: int = 0
    first_on_b: int = 0
    # None when there are no matches.
    average_elapsed_seconds: int | None = None
    average_comments_a: int | None = None
    average_comments_b: int | None = None
    average_votes_a: int | None = None
    average_votes_b: int | None = None

    @property
    def matches(self) -> int:
        return len(self.pairs)


def _truncated_mean(values: Sequence[int]) -> int | None:
    if not values:
        return None
    total = sum(values)
    quotient = abs(total) // len(values)
    return quotient if total >= 0 else -quotient


def _winner(first_value: int, second_value: int, first_name: str, second_name: str) -> str:
    if first_value + second_value <= 0:
        return NOWHERE
    return first_name if first_value > second_value else second_name


def analyze_pair(a: Post, b: Post, *, name_a: str, name_b: str) -> PairAnalysis:
    if b.submit_timestamp < a.submit_timestamp:
        first, second = b, a
        first_name, second_name = name_b, name_a
    else:
        first, second = a, b
        first_name, second_name = name_a, name_b

    elapsed = second.epoch_seconds - first.epoch_seconds

    return PairAnalysis(
        post_a=a,
        post_b=b,
        first_name=first_name,
        second_name=second_name,
        first=first,
        second=second,
        elapsed_seconds=elapsed,
        within_hour=elapsed < HOUR_SECONDS,
        highest_votes=_winner(first.votes, second.votes, first_name, second_name),
        most_comments=_winner(
            first.comment_count, second.comment_count, first_name, second_name
        ),
        same_submitter=first.submitter == second.submitter,
    )


def analyze(
    posts_a: Sequence[Post],
    posts_b: Sequence[Post],
    *,
    name_a: str,
    name_b: str,
) -> CrossPostReport:
    """
    Correlate two post collections and compute per-pair and aggregate metrics.

    Side A is the tie-break winner when both sites carry the same timestamp.
    """
    pairs = [
        analyze_pair(m.a, m.b, name_a=name_a, name_b=name_b)
        for m in match_pairs(posts_a, posts_b)
    ]

    first_on_a = sum(1 for p in pairs if p.first is p.post_a)

    return CrossPostReport(
        name_a=name_a,
        name_b=name_b,
        count_a=len(posts_a),
        count_b=len(posts_b),
        pairs=tuple(pairs),
        first_on_a=first_on_a,
        first_on_b=len(pairs) - first_on_a,
        average_elapsed_seconds=_truncated_mean([p.elapsed_seconds for p in pairs]),
        average_comments_a=_truncated_mean([p.post_a.comment_count for p in pairs]),
        average_comments_b=_truncated_mean([p.post_b.comment_count for p in pairs]),
        average_votes_a=_truncated_mean([p.post_a.votes for p in pairs]),
        average_votes_b=_truncated_mean([p.post_b.votes for p in pairs]),
    )


def format_duration(seconds: int) -> str:
    seconds = max(0, int(seconds))
    days, rem = divmod(seconds, 86400)
    hours, rem = divmod(rem, 3600)
    minutes, secs = divmod(rem, 60)

    parts: list[str] = []
    for value, unit in ((days, "day"), (hours, "hour"), (minutes, "minute"), (secs, "second")):
        if value > 0:
            parts.append(f"{value} {unit}" + ("" if value == 1 else "s"))

    return ", ".join(parts) if parts else "0 seconds"


def _format_pair(pair: PairAnalysis) -> list[str]:
    first, second = pair.first, pair.second
    lines = [
        f"# {pair.title}  ",
        f"URL: {pair.url}  ",
        (
            f"First appeared on **{pair.first_name}** with {first.votes} votes and "
            f"{first.comment_count} comments, submitted by {first.submitter} "
            f"({first.format_local()}; {first.comment_url} ).  "
        ),
    ]
    if pair.within_hour:
        lines.append(f"**Within the hour this was also posted to {pair.second_name}!**")
    lines.append(
        f"After {format_duration(pair.elapsed_seconds)} it was submitted to "
        f"**{pair.second_name}** by {second.submitter} with {second.votes} votes and "
        f"{second.comment_count} comments ({second.format_local()}; {second.comment_url} ).  "
    )
    lines.append(
        f"The highest score was reached on {pair.highest_votes} and the most comments "
        f"were on {pair.most_comments}.  "
    )
    if pair.same_submitter:
        lines.append("**The same username submitted the post to both sites**.  ")
    lines.append("")
    return lines


def format_report(report: CrossPostReport) -> str:
    width = max(len(report.name_a), len(report.name_b))
    lines: list[str] = [
        f"Number of posts from {report.name_a.ljust(width)} : {report.count_a}",
        f"Number of posts from {report.name_b.ljust(width)} : {report.count_b}",
        "",
        f"Matches ({report.matches}):",
        "",
    ]

    for pair in report.pairs:
        lines.extend(_format_pair(pair))

    if report.matches == 0 or report.average_elapsed_seconds is None:
        lines.append("No matches, nothing to average.")
        return "\n".join(lines)

    lines.append(
        f"{report.first_on_a} posts appeared first on {report.name_a} and "
        f"{report.first_on_b} posts appeared first on {report.name_b}."
    )
    lines.append(
        f"Average time for a cross-post: {format_duration(report.average_elapsed_seconds)}."
    )
    lines.append(
        f"Average comments on {report.name_b}: {report.average_comments_b}, "
        f"{report.name_a}: {report.average_comments_a}."
    )
    lines.append(
        f"Average score on {report.name_b}: {report.average_votes_b}, "
        f"{report.name_a}: {report.average_votes_a}."
    )
    return "\n".join(lines)
