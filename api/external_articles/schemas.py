"""
Pydantic schemas for external article endpoints.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from core.schemas import CamelModel
from members.schemas import Member

SourceType = Literal["blog", "facebook", "twitter", "instagram", "rss"]
ArticleCategory = Literal["政策・提案", "活動報告", "市政情報", "地域イベント", "お知らせ", "その他"]


class Source(CamelModel):
    id: int
    council_member_id: int
    source_type: SourceType
    source_url: str
    source_name: str | None = None
    is_active: bool
    last_fetched_at: int | None = None
    fetch_interval: int
    created_by: int | None = None
    created_at: int


class SourceWithMember(Source):
    council_member: Member | None = None


class Article(CamelModel):
    id: int
    title: str
    content: str
    excerpt: str | None = None
    source_url: str
    original_url: str
    image_url: str | None = None
    published_at: int
    fetched_at: int
    council_member_id: int
    source_id: int | None = None
    source_type: SourceType
    category: ArticleCategory
    is_active: bool
    view_count: int
    council_member: Member | None = None
    source: Source | None = None


class CategoryCounts(CamelModel):
    all: int
    policy: int
    activity: int
    municipal: int
    event: int
    notice: int
    other: int


class ViewCount(CamelModel):
    view_count: int


class CreateSourceRequest(CamelModel):
    council_member_id: int
    source_type: SourceType
    source_url: str = Field(..., min_length=1, max_length=2000)
    source_name: str | None = Field(default=None, max_length=200)
    fetch_interval: int | None = Field(default=None, ge=1)


class UpdateSourceRequest(CamelModel):
    council_member_id: int | None = None
    source_type: SourceType | None = None
    source_url: str | None = Field(default=None, min_length=1, max_length=2000)
    source_name: str | None = Field(default=None, max_length=200)
    fetch_interval: int | None = Field(default=None, ge=1)
    is_active: bool | None = None


class CreateArticleRequest(CamelModel):
    title: str = Field(..., min_length=1, max_length=300)
    content: str = Field(..., min_length=1)
    excerpt: str | None = None
    original_url: str = Field(..., min_length=1, max_length=2000)
    image_url: str | None = None
    published_at: int
    council_member_id: int
    source_id: int
    category: ArticleCategory


class UpdateArticleRequest(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=300)
    content: str | None = Field(default=None, min_length=1)
    excerpt: str | None = None
    original_url: str | None = Field(default=None, min_length=1, max_length=2000)
    image_url: str | None = None
    published_at: int | None = None
    category: ArticleCategory | None = None
    is_active: bool | None = None
