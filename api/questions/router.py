"""
Question read endpoints (public, personalised when a caller is known),
admin writes and the rankings overview.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from auth import dependencies as auth_dependencies

from . import filters, rankings, schemas, service

router = APIRouter(prefix="/questions")
rankings_router = APIRouter(prefix="/rankings")


@router.get("", response_model=list[schemas.EnrichedQuestion])
async def list_questions(
    limit: int | None = Query(default=None, ge=1, le=1000),
    category: str | None = Query(default=None, max_length=100),
    member_id: int | None = Query(default=None, alias="memberId"),
    search_term: str | None = Query(default=None, alias="searchTerm", max_length=200),
    session_number: str | None = Query(default=None, alias="sessionNumber", max_length=100),
    question_status: schemas.QuestionStatus | None = Query(default=None, alias="status"),
    sort_by: schemas.ListSortKey | None = Query(default=None, alias="sortBy"),
    user_id: int | None = Depends(auth_dependencies.get_optional_user_id),
) -> list[schemas.EnrichedQuestion]:
    return await service.list_questions(
        filters.QuestionFilters(
            category=category,
            member_id=member_id,
            search_term=search_term,
            session_number=session_number,
            status=question_status,
        ),
        caller_id=user_id,
        sort_by=sort_by,
        limit=limit,
    )


@router.get("/search", response_model=schemas.PagedQuestions)
async def search_questions(
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, alias="pageSize", ge=1, le=200),
    category: str | None = Query(default=None, max_length=100),
    member_id: int | None = Query(default=None, alias="memberId"),
    search_term: str | None = Query(default=None, alias="searchTerm", max_length=200),
    session_number: str | None = Query(default=None, alias="sessionNumber", max_length=100),
    sort_by: schemas.PagedSortKey | None = Query(default=None, alias="sortBy"),
    user_id: int | None = Depends(auth_dependencies.get_optional_user_id),
) -> schemas.PagedQuestions:
    return await service.search_questions_paged(
        filters.QuestionFilters(
            category=category,
            member_id=member_id,
            search_term=search_term,
            session_number=session_number,
        ),
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        caller_id=user_id,
    )


@router.get("/paginated", response_model=schemas.CursorPage)
async def list_questions_paginated(
    cursor: str | None = Query(default=None, max_length=500),
    num_items: int = Query(default=20, alias="numItems", ge=1, le=200),
    category: str | None = Query(default=None, max_length=100),
    member_id: int | None = Query(default=None, alias="memberId"),
    search_term: str | None = Query(default=None, alias="searchTerm", max_length=200),
    user_id: int | None = Depends(auth_dependencies.get_optional_user_id),
) -> schemas.CursorPage:
    return await service.list_questions_paginated(
        cursor=cursor,
        num_items=num_items,
        category=category,
        member_id=member_id,
        search_term=search_term,
        caller_id=user_id,
    )


@router.get("/browse", response_model=schemas.PagedQuestions)
async def browse_questions(
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, alias="pageSize", ge=1, le=200),
    category: str | None = Query(default=None, max_length=100),
    member_id: int | None = Query(default=None, alias="memberId"),
    search_term: str | None = Query(default=None, alias="searchTerm", max_length=200),
    session_number: str | None = Query(default=None, alias="sessionNumber", max_length=100),
    question_status: schemas.QuestionStatus | None = Query(default=None, alias="status"),
    sort_by: schemas.ListSortKey = Query(default="newest", alias="sortBy"),
    user_id: int | None = Depends(auth_dependencies.get_optional_user_id),
) -> schemas.PagedQuestions:
    return await service.browse_questions(
        filters.QuestionFilters(
            category=category,
            member_id=member_id,
            search_term=search_term,
            session_number=session_number,
            status=question_status,
        ),
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        caller_id=user_id,
    )


@router.get("/top-liked", response_model=list[schemas.EnrichedQuestion])
async def top_liked_questions(
    limit: int = Query(default=service.DEFAULT_TOP_LIKED, ge=1, le=100),
    user_id: int | None = Depends(auth_dependencies.get_optional_user_id),
) -> list[schemas.EnrichedQuestion]:
    return await service.top_liked_questions(limit=limit, caller_id=user_id)


@router.get("/recent", response_model=list[schemas.EnrichedQuestion])
async def recent_questions(
    limit: int = Query(default=service.DEFAULT_RECENT, ge=1, le=100),
    user_id: int | None = Depends(auth_dependencies.get_optional_user_id),
) -> list[schemas.EnrichedQuestion]:
    return await service.recent_questions(limit=limit, caller_id=user_id)


@router.get("/categories")
async def get_categories() -> list[str]:
    return await service.categories()


@router.get("/session-numbers")
async def get_session_numbers() -> list[str]:
    return await service.session_numbers()


@router.get("/stats", response_model=schemas.QuestionStats)
async def get_stats() -> schemas.QuestionStats:
    return await service.stats()


@router.get("/{question_id}", response_model=schemas.EnrichedQuestion | None)
async def get_question(
    question_id: int,
    user_id: int | None = Depends(auth_dependencies.get_optional_user_id),
) -> schemas.EnrichedQuestion | None:
    return await service.get_question(question_id, caller_id=user_id)


@router.get("/{question_id}/responses", response_model=list[schemas.Response])
async def get_responses(question_id: int) -> list[schemas.Response]:
    return await service.get_responses(question_id)


@router.post("", response_model=schemas.EnrichedQuestion)
async def create_question(
    payload: schemas.CreateQuestionRequest,
    admin: dict = Depends(auth_dependencies.require_admin),
) -> schemas.EnrichedQuestion:
    return await service.create_question(payload, admin_user_id=int(admin["user_id"]))


@router.patch("/{question_id}", response_model=schemas.EnrichedQuestion)
async def update_question(
    question_id: int,
    payload: schemas.UpdateQuestionRequest,
    admin: dict = Depends(auth_dependencies.require_admin),
) -> schemas.EnrichedQuestion:
    return await service.update_question(question_id, payload, admin_user_id=int(admin["user_id"]))


@router.delete("/{question_id}")
async def delete_question(
    question_id: int,
    admin: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_question(question_id, admin_user_id=int(admin["user_id"]))


@router.post("/{question_id}/responses", response_model=schemas.Response)
async def add_response(
    question_id: int,
    payload: schemas.CreateResponseRequest,
    admin: dict = Depends(auth_dependencies.require_admin),
) -> schemas.Response:
    return await service.add_response(question_id, payload, admin_user_id=int(admin["user_id"]))


@router.patch("/responses/{response_id}", response_model=schemas.Response)
async def update_response(
    response_id: int,
    payload: schemas.UpdateResponseRequest,
    admin: dict = Depends(auth_dependencies.require_admin),
) -> schemas.Response:
    return await service.update_response(response_id, payload, admin_user_id=int(admin["user_id"]))


@router.delete("/responses/{response_id}")
async def delete_response(
    response_id: int,
    admin: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_response(response_id, admin_user_id=int(admin["user_id"]))


@rankings_router.get("", response_model=schemas.Rankings)
async def get_rankings(
    limit: int = Query(default=rankings.DEFAULT_RANKING_LIMIT, ge=1, le=100),
    user_id: int | None = Depends(auth_dependencies.get_optional_user_id),
) -> schemas.Rankings:
    return await service.ranking_overview(limit=limit, caller_id=user_id)
