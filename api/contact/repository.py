"""
Contact message persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db

CONTACT_COLUMNS = "id, name, email, subject, message, category, status, response, submitted_at, updated_at"


async def create_message(fields: dict[str, Any], *, submitted_at: int) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO contact_messages (name, email, subject, message, category, status, submitted_at)
        VALUES ($1, $2, $3, $4, $5, 'new', $6)
        RETURNING {CONTACT_COLUMNS}
        """,
        fields["name"],
        fields["email"],
        fields.get("subject") or "",
        fields["message"],
        fields["category"],
        submitted_at,
    )
    if row is None:
        raise RuntimeError("Failed to store contact message.")
    return row


async def list_messages(*, status: str | None = None) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {CONTACT_COLUMNS}
        FROM contact_messages
        WHERE ($1::text IS NULL OR status = $1)
        ORDER BY id DESC
        """,
        status,
    )


async def update_status(message_id: int, *, status: str, response: str | None, updated_at: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        UPDATE contact_messages
        SET status = $2, response = $3, updated_at = $4
        WHERE id = $1
        RETURNING {CONTACT_COLUMNS}
        """,
        message_id,
        status,
        response,
        updated_at,
    )
