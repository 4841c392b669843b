"""
Like persistence (raw SQL).

`likes (user_id, question_id)` is unique, so at most one like per pair can
exist no matter how toggles interleave.
"""

from __future__ import annotations

from core import db


async def toggle_like(*, user_id: int, question_id: int) -> bool:
    """
    Remove the caller's like if present, otherwise add it.
    Returns the new liked state.
    """
    async with db.transaction() as conn:
        status_tag = await db.execute(
            "DELETE FROM likes WHERE user_id = $1 AND question_id = $2",
            user_id,
            question_id,
            conn=conn,
        )
        if db.affected_rows(status_tag) > 0:
            return False

        await db.execute(
            """
            INSERT INTO likes (user_id, question_id)
            VALUES ($1, $2)
            ON CONFLICT (user_id, question_id) DO NOTHING
            """,
            user_id,
            question_id,
            conn=conn,
        )
        return True


async def count_likes(question_id: int) -> int:
    return int(await db.fetch_value("SELECT count(*) FROM likes WHERE question_id = $1", question_id) or 0)


async def is_liked(*, user_id: int, question_id: int) -> bool:
    row = await db.fetch_one(
        "SELECT 1 AS liked FROM likes WHERE user_id = $1 AND question_id = $2",
        user_id,
        question_id,
    )
    return row is not None
