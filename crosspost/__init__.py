from __future__ import annotations

from .analyze import CrossPostReport, PairAnalysis, analyze, format_report
from .config import config_sha256, load_config
from .config_schema import AppConfig
from .correlate import MatchedPair, intersect, match_pairs
from .errors import ConfigError, FetchError
from .fetcher import JsonFetcher
from .post import Post

__all__ = [
    "AppConfig",
    "ConfigError",
    "CrossPostReport",
    "FetchError",
    "JsonFetcher",
    "MatchedPair",
    "PairAnalysis",
    "Post",
    "analyze",
    "config_sha256",
    "format_report",
    "intersect",
    "load_config",
    "match_pairs",
]
