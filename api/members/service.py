"""
Council member reads, admin writes and term-scoped statistics.

Statistics only count questions asked during the member's term:
`term_start <= session_date` and, when a term end is set,
`session_date <= term_end`.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from zoneinfo import ZoneInfo

import asyncpg
from fastapi import HTTPException, status

from core.config import stats_timezone
from core.storage import BlobStorage, resolve_media_url
from questions import rankings
from questions import repository as questions_repository

from . import repository, schemas

logger = logging.getLogger(__name__)


def within_term(member: dict[str, Any], session_date: int) -> bool:
    if session_date < int(member["term_start"]):
        return False
    term_end = member.get("term_end")
    return not (term_end and session_date > int(term_end))


def _year_of(epoch_ms: int) -> int:
    return datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc).astimezone(ZoneInfo(stats_timezone())).year


def _current_year() -> int:
    return datetime.now(ZoneInfo(stats_timezone())).year


def with_photo(member: dict[str, Any], storage: BlobStorage | None) -> schemas.Member:
    return schemas.Member.model_validate(
        {
            **member,
            "member_photo_url": resolve_media_url(storage, member.get("photo_id"), member.get("photo_url")),
        }
    )


async def list_members(*, active_only: bool = False, storage: BlobStorage | None) -> list[schemas.Member]:
    rows = await repository.list_members(active_only=active_only)
    return [with_photo(row, storage) for row in rows]


async def get_member(member_id: int, *, storage: BlobStorage | None) -> schemas.Member | None:
    row = await repository.get_member(member_id)
    return with_photo(row, storage) if row is not None else None


async def _term_stats(member: dict[str, Any]) -> tuple[list[dict[str, Any]], schemas.MemberStats]:
    questions = [
        q
        for q in await questions_repository.list_questions(member_id=member["id"])
        if within_term(member, int(q["session_date"]))
    ]
    like_counts = await repository.like_counts_for_member(member["id"])
    this_year = _current_year()

    return questions, schemas.MemberStats(
        total_questions=len(questions),
        questions_this_year=sum(1 for q in questions if _year_of(int(q["session_date"])) == this_year),
        total_likes=sum(like_counts.get(int(q["id"]), 0) for q in questions),
    )


async def member_stats(member_id: int) -> schemas.MemberStats:
    member = await repository.get_member(member_id)
    if member is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Council member not found.")

    questions, stats = await _term_stats(member)
    stats.categories = [
        schemas.NamedCount(name=c["category"], count=c["count"])
        for c in rankings.category_stats(questions, limit=None)
    ]
    return stats


async def member_rankings(*, storage: BlobStorage | None) -> schemas.MemberRankings:
    """
    Term-scoped question leaderboard. Chairpersons cannot ask questions and
    are listed separately.
    """
    ranked: list[schemas.MemberRanking] = []
    excluded: list[schemas.ExcludedMember] = []

    for member in await repository.list_members():
        if rankings.is_chairperson(member):
            excluded.append(schemas.ExcludedMember(member=with_photo(member, storage), reason=member["position"]))
            continue
        _, stats = await _term_stats(member)
        ranked.append(schemas.MemberRanking(member=with_photo(member, storage), stats=stats))

    ranked.sort(key=lambda r: r.stats.total_questions, reverse=True)
    return schemas.MemberRankings(rankings=ranked, excluded_members=excluded)


async def party_rankings() -> list[schemas.PartyRanking]:
    parties: dict[str, dict[str, int]] = {}
    for member in await repository.list_members():
        bucket = parties.setdefault(
            rankings.party_of(member),
            {"member_count": 0, "total_questions": 0, "total_likes": 0},
        )
        _, stats = await _term_stats(member)
        bucket["member_count"] += 1
        bucket["total_questions"] += stats.total_questions
        bucket["total_likes"] += stats.total_likes

    ranked = [schemas.PartyRanking(name=name, **values) for name, values in parties.items()]
    ranked.sort(key=lambda p: p.total_questions, reverse=True)
    return ranked


async def create_member(
    payload: schemas.CreateMemberRequest,
    *,
    admin_user_id: int,
    storage: BlobStorage | None,
) -> schemas.Member:
    row = await repository.create_member(payload.model_dump())
    logger.info("member_created member_id=%s by=%s", row["id"], admin_user_id)
    return with_photo(row, storage)


async def update_member(
    member_id: int,
    payload: schemas.UpdateMemberRequest,
    *,
    admin_user_id: int,
    storage: BlobStorage | None,
) -> schemas.Member:
    fields = payload.model_dump(exclude_unset=True)
    if not fields:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update.")
    for required in ("name", "term_start", "is_active"):
        if fields.get(required) is None:
            fields.pop(required, None)

    row = await repository.update_member(member_id, fields)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Council member not found.")
    logger.info("member_updated member_id=%s fields=%s by=%s", member_id, sorted(fields), admin_user_id)
    return with_photo(row, storage)


async def delete_member(member_id: int, *, admin_user_id: int) -> dict:
    try:
        deleted = await repository.delete_member(member_id)
    except asyncpg.ForeignKeyViolationError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Council member still has questions.",
        ) from exc

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Council member not found.")
    logger.info("member_deleted member_id=%s by=%s", member_id, admin_user_id)
    return {"ok": True, "member_id": member_id}
