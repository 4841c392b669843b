"""
Question read paths (aggregation) and admin writes.

Every read path follows the same flow:
1) pick a base ordered set (member index or session-date index)
2) filter / sort / slice with the shared rules in `filters`
3) enrich each surviving row with member, response and like data

Enrichment runs one independent set of lookups per row. That is fine for a
single council's volume; batch the lookups before pointing this at a larger
dataset, keeping the output shape unchanged.
"""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any

from fastapi import HTTPException, status

from core.config import questions_page_size
from members import repository as members_repository

from . import filters, rankings, repository, schemas

logger = logging.getLogger(__name__)

UNKNOWN_MEMBER = "不明"
DEFAULT_TOP_LIKED = 10
DEFAULT_RECENT = 10


async def enrich_question(row: dict[str, Any], *, caller_id: int | None) -> dict[str, Any]:
    """
    Attach member_name / member_party / member_photo_url / response_count /
    like_count / is_liked. A missing member falls back to UNKNOWN_MEMBER.
    """
    member = await members_repository.get_member(row["council_member_id"])
    responses = await repository.list_responses(row["id"])
    likes = await repository.list_likes(row["id"])

    return {
        **row,
        "member_name": (member or {}).get("name") or UNKNOWN_MEMBER,
        "member_party": (member or {}).get("party"),
        "member_photo_url": (member or {}).get("photo_url"),
        "response_count": len(responses),
        "like_count": len(likes),
        "is_liked": caller_id is not None and any(like["user_id"] == caller_id for like in likes),
    }


async def enrich_all(rows: list[dict[str, Any]], *, caller_id: int | None) -> list[dict[str, Any]]:
    return list(await asyncio.gather(*(enrich_question(row, caller_id=caller_id) for row in rows)))


def _models(rows: list[dict[str, Any]]) -> list[schemas.EnrichedQuestion]:
    return [schemas.EnrichedQuestion.model_validate(row) for row in rows]


async def list_questions(
    question_filters: filters.QuestionFilters,
    *,
    caller_id: int | None,
    sort_by: str | None = None,
    limit: int | None = None,
) -> list[schemas.EnrichedQuestion]:
    """
    Unpaginated full-match list in index order (optionally re-sorted).
    `limit` cuts the sorted list.
    """
    rows = await repository.list_questions(member_id=question_filters.member_id)
    logger.debug("questions_full_scan member_id=%s rows=%s", question_filters.member_id, len(rows))

    matched = filters.apply_filters(rows, question_filters)
    if sort_by == filters.SORT_LIKES:
        # Like counts only exist after enrichment.
        ordered = filters.sort_questions(await enrich_all(matched, caller_id=caller_id), sort_by)
        return _models(ordered[:limit] if limit else ordered)

    ordered = filters.sort_questions(matched, sort_by)
    if limit:
        ordered = ordered[:limit]
    return _models(await enrich_all(ordered, caller_id=caller_id))


async def search_questions_paged(
    question_filters: filters.QuestionFilters,
    *,
    page: int,
    page_size: int | None = None,
    sort_by: str | None = None,
    caller_id: int | None,
) -> schemas.PagedQuestions:
    """
    Offset pagination over the fully materialized, filtered and sorted set.
    Only the requested slice is enriched.
    """
    size = page_size or questions_page_size()
    rows = await repository.list_questions(member_id=question_filters.member_id)
    matched = filters.refine(rows, question_filters, sort_by=sort_by)

    try:
        sliced, pagination = filters.paginate(matched, page=page, page_size=size)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    enriched = await enrich_all(sliced, caller_id=caller_id)
    return schemas.PagedQuestions(
        questions=_models(enriched),
        pagination=schemas.PaginationInfo.model_validate(pagination),
    )


async def list_questions_paginated(
    *,
    cursor: str | None,
    num_items: int,
    category: str | None = None,
    member_id: int | None = None,
    search_term: str | None = None,
    caller_id: int | None,
) -> schemas.CursorPage:
    """
    Cursor pagination: the storage page is cut first and the filters apply to
    that page only, so a page can come back shorter than `num_items`.
    """
    try:
        result = await repository.page_questions(member_id=member_id, cursor=cursor, num_items=num_items)
    except repository.InvalidCursor as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    page_filters = filters.QuestionFilters(category=category, search_term=search_term)
    matched = filters.apply_filters(result["rows"], page_filters)
    enriched = await enrich_all(matched, caller_id=caller_id)
    return schemas.CursorPage(
        page=_models(enriched),
        is_done=bool(result["is_done"]),
        continue_cursor=str(result["continue_cursor"] or ""),
    )


async def browse_questions(
    question_filters: filters.QuestionFilters,
    *,
    page: int,
    page_size: int | None = None,
    sort_by: str | None = filters.SORT_NEWEST,
    caller_id: int | None,
) -> schemas.PagedQuestions:
    """
    List-view refinement: every question is enriched first so the search also
    covers member names and `likes` sorting has counts to work with.
    """
    size = page_size or questions_page_size()
    rows = await repository.list_questions()
    enriched = await enrich_all(rows, caller_id=caller_id)
    refined = filters.refine(enriched, question_filters, sort_by=sort_by, include_member_name=True)

    try:
        sliced, pagination = filters.paginate(refined, page=page, page_size=size)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return schemas.PagedQuestions(
        questions=_models(sliced),
        pagination=schemas.PaginationInfo.model_validate(pagination),
    )


def _creation_order(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return sorted(rows, key=lambda r: r["id"])


async def top_liked_questions(*, limit: int = DEFAULT_TOP_LIKED, caller_id: int | None) -> list[schemas.EnrichedQuestion]:
    """Most liked first; equal counts keep creation order."""
    rows = _creation_order(await repository.list_questions())
    enriched = await enrich_all(rows, caller_id=caller_id)
    return _models(rankings.top_liked(enriched, limit))


async def recent_questions(*, limit: int = DEFAULT_RECENT, caller_id: int | None) -> list[schemas.EnrichedQuestion]:
    rows = await repository.recent_questions(limit)
    return _models(await enrich_all(rows, caller_id=caller_id))


async def get_question(question_id: int, *, caller_id: int | None) -> schemas.EnrichedQuestion | None:
    row = await repository.get_question(question_id)
    if row is None:
        return None
    return schemas.EnrichedQuestion.model_validate(await enrich_question(row, caller_id=caller_id))


async def get_responses(question_id: int) -> list[schemas.Response]:
    return [schemas.Response.model_validate(r) for r in await repository.list_responses(question_id)]


async def categories() -> list[str]:
    rows = await repository.list_questions()
    return filters.distinct_sorted(r.get("category") for r in rows)


async def session_numbers() -> list[str]:
    rows = await repository.list_questions()
    return filters.distinct_sorted(r.get("session_number") for r in rows)


def _percent(part: int, total: int) -> int:
    # Halves round up (62.5 -> 63), not to even.
    return math.floor(part * 100 / total + 0.5) if total else 0


async def stats() -> schemas.QuestionStats:
    rows = await repository.list_questions()
    total = len(rows)
    answered = sum(1 for r in rows if r.get("status") == "answered")
    category_counts: dict[str, int] = {}
    for r in rows:
        category_counts[r["category"]] = category_counts.get(r["category"], 0) + 1

    return schemas.QuestionStats(
        total_questions=total,
        answered_questions=answered,
        total_responses=await repository.count_responses(),
        answer_rate=_percent(answered, total),
        category_stats=category_counts,
    )


async def ranking_overview(*, limit: int = rankings.DEFAULT_RANKING_LIMIT, caller_id: int | None) -> schemas.Rankings:
    members = await members_repository.list_members()
    questions = await enrich_all(await repository.list_questions(), caller_id=caller_id)

    counts = rankings.member_question_counts(members, questions)
    regular, chairs = rankings.split_members(counts)
    regular = [{**m, "badge": rankings.rank_badge(i)} for i, m in enumerate(regular)]

    return schemas.Rankings(
        member_question_counts=counts,
        regular_members=regular,
        chairperson_members=chairs,
        like_rankings=[
            {**m, "badge": rankings.rank_badge(i)} for i, m in enumerate(rankings.like_rankings(regular, limit))
        ],
        party_stats=rankings.party_stats(members, questions),
        top_categories=rankings.category_stats(questions),
        top_liked_questions=_models(rankings.top_liked(_creation_order(questions), limit)),
    )


def _changed_fields(payload) -> dict[str, Any]:
    return payload.model_dump(exclude_unset=True, exclude_none=True)


async def create_question(payload: schemas.CreateQuestionRequest, *, admin_user_id: int) -> schemas.EnrichedQuestion:
    if await members_repository.get_member(payload.council_member_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Council member not found.")

    row = await repository.create_question(payload.model_dump())
    logger.info("question_created question_id=%s by=%s", row["id"], admin_user_id)
    return schemas.EnrichedQuestion.model_validate(await enrich_question(row, caller_id=admin_user_id))


async def update_question(
    question_id: int,
    payload: schemas.UpdateQuestionRequest,
    *,
    admin_user_id: int,
) -> schemas.EnrichedQuestion:
    fields = _changed_fields(payload)
    if not fields:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update.")

    row = await repository.update_question(question_id, fields)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Question not found.")
    logger.info("question_updated question_id=%s fields=%s by=%s", question_id, sorted(fields), admin_user_id)
    return schemas.EnrichedQuestion.model_validate(await enrich_question(row, caller_id=admin_user_id))


async def delete_question(question_id: int, *, admin_user_id: int) -> dict[str, Any]:
    if not await repository.delete_question(question_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Question not found.")
    logger.info("question_deleted question_id=%s by=%s", question_id, admin_user_id)
    return {"ok": True, "question_id": question_id}


async def add_response(question_id: int, payload: schemas.CreateResponseRequest, *, admin_user_id: int) -> schemas.Response:
    if await repository.get_question(question_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Question not found.")

    row = await repository.create_response({**payload.model_dump(), "question_id": question_id})
    logger.info("response_created response_id=%s question_id=%s by=%s", row["id"], question_id, admin_user_id)
    return schemas.Response.model_validate(row)


async def update_response(response_id: int, payload: schemas.UpdateResponseRequest, *, admin_user_id: int) -> schemas.Response:
    fields = _changed_fields(payload)
    if not fields:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update.")

    row = await repository.update_response(response_id, fields)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Response not found.")
    logger.info("response_updated response_id=%s by=%s", response_id, admin_user_id)
    return schemas.Response.model_validate(row)


async def delete_response(response_id: int, *, admin_user_id: int) -> dict[str, Any]:
    if not await repository.delete_response(response_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Response not found.")
    logger.info("response_deleted response_id=%s by=%s", response_id, admin_user_id)
    return {"ok": True, "response_id": response_id}
