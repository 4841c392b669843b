"""
Like endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter(prefix="/questions")


@router.post("/{question_id}/like", response_model=schemas.LikeState)
async def toggle_like(
    question_id: int,
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> schemas.LikeState:
    return await service.toggle_like(question_id, user_id=user_id)


@router.get("/{question_id}/like", response_model=schemas.LikeState)
async def get_like_state(
    question_id: int,
    user_id: int | None = Depends(auth_dependencies.get_optional_user_id),
) -> schemas.LikeState:
    return await service.like_state(question_id, user_id=user_id)
