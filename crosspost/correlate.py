from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .post import Post


@dataclass(frozen=True)
class MatchedPair:
    a: Post
    b: Post


def intersect(posts_a: Sequence[Post], posts_b: Sequence[Post]) -> list[Post]:
    """
    Posts of side A whose original_url also occurs on side B.

    Sorted merge over both collections; one element per distinct URL, in
    ascending URL order, so the result does not depend on input order.
    """
    left = sorted(posts_a, key=lambda p: p.original_url)
    right = sorted(posts_b, key=lambda p: p.original_url)

    out: list[Post] = []
    i = j = 0
    while i < len(left) and j < len(right):
        ka = left[i].original_url
        kb = right[j].original_url
        if ka < kb:
            i += 1
        elif kb < ka:
            j += 1
        else:
            out.append(left[i])
            while i < len(left) and left[i].original_url == ka:
                i += 1
            while j < len(right) and right[j].original_url == ka:
                j += 1

    return out


def _first_with_url(posts: Sequence[Post], url: str) -> Post | None:
    for post in posts:
        if post.original_url == url:
            return post
    return None


def match_pairs(posts_a: Sequence[Post], posts_b: Sequence[Post]) -> list[MatchedPair]:
    """
    Pair up the first occurrence of every shared URL on each side.

    Later duplicates of a URL within one collection are not reported.
    """
    pairs: list[MatchedPair] = []
    for shared in intersect(posts_a, posts_b):
        a = _first_with_url(posts_a, shared.original_url)
        b = _first_with_url(posts_b, shared.original_url)
        if a is None or b is None:
            continue
        pairs.append(MatchedPair(a=a, b=b))
    return pairs
