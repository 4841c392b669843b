"""
Like toggle for authenticated users.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from questions import repository as questions_repository

from . import repository, schemas

logger = logging.getLogger(__name__)


async def toggle_like(question_id: int, *, user_id: int) -> schemas.LikeState:
    if await questions_repository.get_question(question_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Question not found.")

    liked = await repository.toggle_like(user_id=user_id, question_id=question_id)
    like_count = await repository.count_likes(question_id)
    logger.info("like_toggled question_id=%s user_id=%s liked=%s", question_id, user_id, liked)
    return schemas.LikeState(liked=liked, like_count=like_count)


async def like_state(question_id: int, *, user_id: int | None) -> schemas.LikeState:
    liked = user_id is not None and await repository.is_liked(user_id=user_id, question_id=question_id)
    return schemas.LikeState(liked=liked, like_count=await repository.count_likes(question_id))
