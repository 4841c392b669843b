"""
Pydantic schemas for council member endpoints.
"""

from __future__ import annotations

from pydantic import Field

from core.schemas import CamelModel


class Member(CamelModel):
    id: int
    name: str
    party: str | None = None
    position: str | None = None
    political_party: str | None = None
    election_count: int | None = None
    committee: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    website: str | None = None
    blog_url: str | None = None
    bio: str | None = None
    notes: str | None = None
    photo_url: str | None = None
    photo_id: str | None = None
    term_start: int
    term_end: int | None = None
    is_active: bool
    member_photo_url: str | None = None


class CreateMemberRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    party: str | None = Field(default=None, max_length=100)
    position: str | None = Field(default=None, max_length=100)
    political_party: str | None = Field(default=None, max_length=100)
    election_count: int | None = Field(default=None, ge=0)
    committee: str | None = Field(default=None, max_length=200)
    address: str | None = Field(default=None, max_length=300)
    phone: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=320)
    website: str | None = None
    blog_url: str | None = None
    bio: str | None = None
    notes: str | None = None
    photo_url: str | None = None
    photo_id: str | None = Field(default=None, max_length=300)
    term_start: int
    term_end: int | None = None
    is_active: bool = True


class UpdateMemberRequest(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    party: str | None = Field(default=None, max_length=100)
    position: str | None = Field(default=None, max_length=100)
    political_party: str | None = Field(default=None, max_length=100)
    election_count: int | None = Field(default=None, ge=0)
    committee: str | None = Field(default=None, max_length=200)
    address: str | None = Field(default=None, max_length=300)
    phone: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=320)
    website: str | None = None
    blog_url: str | None = None
    bio: str | None = None
    notes: str | None = None
    photo_url: str | None = None
    photo_id: str | None = Field(default=None, max_length=300)
    term_start: int | None = None
    term_end: int | None = None
    is_active: bool | None = None


class NamedCount(CamelModel):
    name: str
    count: int


class MemberStats(CamelModel):
    total_questions: int
    questions_this_year: int
    total_likes: int
    categories: list[NamedCount] = []


class MemberRanking(CamelModel):
    member: Member
    stats: MemberStats


class ExcludedMember(CamelModel):
    member: Member
    reason: str


class MemberRankings(CamelModel):
    rankings: list[MemberRanking]
    excluded_members: list[ExcludedMember]


class PartyRanking(CamelModel):
    name: str
    member_count: int
    total_questions: int
    total_likes: int
