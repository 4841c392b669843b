"""
Question and response persistence (raw SQL).

Two read orders mirror the two question indexes:
- by member: `council_member_id`, newest created first (id desc)
- by session date: `session_date` desc, id desc
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any

from core import db

QUESTION_COLUMNS = """
    id, title, content, category, council_member_id, session_date,
    session_number, youtube_url, document_url, status, created_at
"""

RESPONSE_COLUMNS = """
    id, question_id, content, respondent_title, department, response_date, document_url
"""

QUESTION_UPDATABLE = (
    "title",
    "content",
    "category",
    "session_date",
    "session_number",
    "youtube_url",
    "document_url",
    "status",
)

RESPONSE_UPDATABLE = ("content", "respondent_title", "department", "response_date", "document_url")


class InvalidCursor(ValueError):
    pass


def encode_cursor(row: dict[str, Any]) -> str:
    payload = json.dumps({"d": row.get("session_date"), "i": row["id"]}, separators=(",", ":"))
    return base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii")


def decode_cursor(cursor: str | None) -> tuple[int | None, int] | None:
    """
    Return (session_date, id) of the last row already served, or None for
    the first page.
    """
    raw = (cursor or "").strip()
    if not raw:
        return None
    try:
        data = json.loads(base64.urlsafe_b64decode(raw.encode("ascii")))
        last_id = int(data["i"])
        session_date = data.get("d")
        return (int(session_date) if session_date is not None else None), last_id
    except (binascii.Error, UnicodeError, ValueError, KeyError, TypeError) as exc:
        raise InvalidCursor("Invalid cursor.") from exc


def _set_clause(fields: dict[str, Any], allowed: tuple[str, ...]) -> tuple[str, list[Any]]:
    columns = [name for name in allowed if name in fields]
    clause = ", ".join(f"{name} = ${index}" for index, name in enumerate(columns, start=2))
    return clause, [fields[name] for name in columns]


async def list_questions(*, member_id: int | None = None) -> list[dict[str, Any]]:
    """
    Materialize every question in index order. This is a full-table read and
    only suits the small volumes this site handles.
    """
    if member_id is not None:
        return await db.fetch_all(
            f"""
            SELECT {QUESTION_COLUMNS}
            FROM questions
            WHERE council_member_id = $1
            ORDER BY id DESC
            """,
            member_id,
        )
    return await db.fetch_all(
        f"""
        SELECT {QUESTION_COLUMNS}
        FROM questions
        ORDER BY session_date DESC, id DESC
        """
    )


async def page_questions(
    *,
    member_id: int | None = None,
    cursor: str | None = None,
    num_items: int,
) -> dict[str, Any]:
    """
    Keyset page in index order. Returns {"rows", "is_done", "continue_cursor"}.
    """
    after = decode_cursor(cursor)
    limit = num_items + 1

    if member_id is not None:
        rows = await db.fetch_all(
            f"""
            SELECT {QUESTION_COLUMNS}
            FROM questions
            WHERE council_member_id = $1
              AND ($2::bigint IS NULL OR id < $2)
            ORDER BY id DESC
            LIMIT $3
            """,
            member_id,
            after[1] if after else None,
            limit,
        )
    else:
        rows = await db.fetch_all(
            f"""
            SELECT {QUESTION_COLUMNS}
            FROM questions
            WHERE ($1::bigint IS NULL OR (session_date, id) < ($1, $2))
            ORDER BY session_date DESC, id DESC
            LIMIT $3
            """,
            after[0] if after else None,
            after[1] if after else None,
            limit,
        )

    page = rows[:num_items]
    return {
        "rows": page,
        "is_done": len(rows) <= num_items,
        "continue_cursor": encode_cursor(page[-1]) if page else (cursor or ""),
    }


async def recent_questions(limit: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {QUESTION_COLUMNS}
        FROM questions
        ORDER BY session_date DESC, id DESC
        LIMIT $1
        """,
        limit,
    )


async def get_question(question_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"SELECT {QUESTION_COLUMNS} FROM questions WHERE id = $1",
        question_id,
    )


async def create_question(fields: dict[str, Any]) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO questions (
            title, content, category, council_member_id, session_date,
            session_number, youtube_url, document_url, status
        )
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8, 'pending')
        RETURNING {QUESTION_COLUMNS}
        """,
        fields["title"],
        fields["content"],
        fields["category"],
        fields["council_member_id"],
        fields["session_date"],
        fields.get("session_number"),
        fields.get("youtube_url"),
        fields.get("document_url"),
    )
    if row is None:
        raise RuntimeError("Failed to create question.")
    return row


async def update_question(question_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
    clause, values = _set_clause(fields, QUESTION_UPDATABLE)
    if not clause:
        return await get_question(question_id)
    return await db.fetch_one(
        f"UPDATE questions SET {clause} WHERE id = $1 RETURNING {QUESTION_COLUMNS}",
        question_id,
        *values,
    )


async def delete_question(question_id: int) -> bool:
    """Delete a question together with its responses and likes."""
    async with db.transaction() as conn:
        await db.execute("DELETE FROM responses WHERE question_id = $1", question_id, conn=conn)
        await db.execute("DELETE FROM likes WHERE question_id = $1", question_id, conn=conn)
        status_tag = await db.execute("DELETE FROM questions WHERE id = $1", question_id, conn=conn)
    return db.affected_rows(status_tag) > 0


async def list_responses(question_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {RESPONSE_COLUMNS}
        FROM responses
        WHERE question_id = $1
        ORDER BY id ASC
        """,
        question_id,
    )


async def list_likes(question_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        "SELECT id, user_id, question_id FROM likes WHERE question_id = $1",
        question_id,
    )


async def count_responses() -> int:
    return int(await db.fetch_value("SELECT count(*) FROM responses") or 0)


async def create_response(fields: dict[str, Any]) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO responses (question_id, content, respondent_title, department, response_date, document_url)
        VALUES ($1, $2, $3, $4, $5, $6)
        RETURNING {RESPONSE_COLUMNS}
        """,
        fields["question_id"],
        fields["content"],
        fields.get("respondent_title"),
        fields.get("department"),
        fields["response_date"],
        fields.get("document_url"),
    )
    if row is None:
        raise RuntimeError("Failed to create response.")
    return row


async def update_response(response_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
    clause, values = _set_clause(fields, RESPONSE_UPDATABLE)
    if not clause:
        return None
    return await db.fetch_one(
        f"UPDATE responses SET {clause} WHERE id = $1 RETURNING {RESPONSE_COLUMNS}",
        response_id,
        *values,
    )


async def delete_response(response_id: int) -> bool:
    status_tag = await db.execute("DELETE FROM responses WHERE id = $1", response_id)
    return db.affected_rows(status_tag) > 0
