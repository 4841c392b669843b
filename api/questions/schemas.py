"""
Pydantic schemas for question endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from core.schemas import CamelModel

QuestionStatus = Literal["pending", "answered", "archived"]
PagedSortKey = Literal["newest", "oldest", "title"]
ListSortKey = Literal["newest", "oldest", "title", "likes"]


class EnrichedQuestion(CamelModel):
    id: int
    title: str
    content: str
    category: str
    council_member_id: int
    session_date: int
    session_number: str | None = None
    youtube_url: str | None = None
    document_url: str | None = None
    status: QuestionStatus
    created_at: datetime | None = None
    member_name: str
    member_party: str | None = None
    member_photo_url: str | None = None
    response_count: int
    like_count: int
    is_liked: bool


class PaginationInfo(CamelModel):
    current_page: int
    total_pages: int
    total_count: int
    page_size: int
    has_next_page: bool
    has_prev_page: bool


class PagedQuestions(CamelModel):
    questions: list[EnrichedQuestion]
    pagination: PaginationInfo


class CursorPage(CamelModel):
    page: list[EnrichedQuestion]
    is_done: bool
    continue_cursor: str


class Response(CamelModel):
    id: int
    question_id: int
    content: str
    respondent_title: str | None = None
    department: str | None = None
    response_date: int
    document_url: str | None = None


class QuestionStats(CamelModel):
    total_questions: int
    answered_questions: int
    total_responses: int
    answer_rate: int
    category_stats: dict[str, int]


class CreateQuestionRequest(CamelModel):
    title: str = Field(..., min_length=1, max_length=300)
    content: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1, max_length=100)
    council_member_id: int
    session_date: int
    session_number: str | None = Field(default=None, max_length=100)
    youtube_url: str | None = None
    document_url: str | None = None


class UpdateQuestionRequest(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=300)
    content: str | None = Field(default=None, min_length=1)
    category: str | None = Field(default=None, min_length=1, max_length=100)
    session_date: int | None = None
    session_number: str | None = Field(default=None, max_length=100)
    youtube_url: str | None = None
    document_url: str | None = None
    status: QuestionStatus | None = None


class CreateResponseRequest(CamelModel):
    content: str = Field(..., min_length=1)
    respondent_title: str | None = Field(default=None, max_length=200)
    department: str | None = Field(default=None, max_length=200)
    response_date: int
    document_url: str | None = None


class UpdateResponseRequest(CamelModel):
    content: str | None = Field(default=None, min_length=1)
    respondent_title: str | None = Field(default=None, max_length=200)
    department: str | None = Field(default=None, max_length=200)
    response_date: int | None = None
    document_url: str | None = None


class MemberCount(CamelModel):
    id: int
    name: str
    party: str | None = None
    position: str | None = None
    question_count: int
    total_likes: int
    is_chairperson: bool
    badge: str | None = None


class PartyStat(CamelModel):
    party: str
    member_count: int
    question_count: int
    total_likes: int


class CategoryStat(CamelModel):
    category: str
    count: int


class Rankings(CamelModel):
    member_question_counts: list[MemberCount]
    regular_members: list[MemberCount]
    chairperson_members: list[MemberCount]
    like_rankings: list[MemberCount]
    party_stats: list[PartyStat]
    top_categories: list[CategoryStat]
    top_liked_questions: list[EnrichedQuestion]
