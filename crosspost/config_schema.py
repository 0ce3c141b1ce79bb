from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

PAGE_PLACEHOLDER = "%PAGENUMBER%"
ID_PLACEHOLDER = "%ID%"


def _require_placeholder(value: str, placeholder: str) -> str:
    path = (value or "").strip()
    if placeholder not in path:
        raise ValueError(f"must contain the {placeholder} placeholder")
    return path


def _require_https_base(value: str) -> str:
    url = (value or "").strip().rstrip("/")
    if not url.startswith("https://"):
        raise ValueError("must be an https:// URL")
    return url


PositiveInt = Annotated[int, Field(ge=1)]


class ForumSourceConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str = "https://lobste.rs"
    top_path: str = "/page/%PAGENUMBER%.json"
    new_path: str = "/newest/page/%PAGENUMBER%.json"
    pages: PositiveInt = 8
    comment_base_url: str = "https://lobste.rs/s"

    @field_validator("base_url")
    @classmethod
    def _base_url_must_be_https(cls, v: str) -> str:
        return _require_https_base(v)

    @field_validator("top_path", "new_path")
    @classmethod
    def _paths_need_page_placeholder(cls, v: str) -> str:
        return _require_placeholder(v, PAGE_PLACEHOLDER)

    @field_validator("comment_base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return (v or "").strip().rstrip("/")


class NewsSourceConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str = "https://hacker-news.firebaseio.com"
    top_ids_path: str = "/v0/beststories.json"
    new_ids_path: str = "/v0/newstories.json"
    item_path: str = "/v0/item/%ID%.json"
    max_stories: PositiveInt = 200
    item_view_url: str = "https://news.ycombinator.com/item?id="

    @field_validator("base_url")
    @classmethod
    def _base_url_must_be_https(cls, v: str) -> str:
        return _require_https_base(v)

    @field_validator("item_path")
    @classmethod
    def _item_path_needs_id_placeholder(cls, v: str) -> str:
        return _require_placeholder(v, ID_PLACEHOLDER)


class HttpConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    timeout_seconds: float = Field(30.0, gt=0.0)
    user_agent: str = "crosspost/0.1"
    insecure_skip_tls_verify: bool = False


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    forum: ForumSourceConfig = Field(default_factory=ForumSourceConfig)
    news: NewsSourceConfig = Field(default_factory=NewsSourceConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
