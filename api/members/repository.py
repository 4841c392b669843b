"""
Council member persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db

MEMBER_COLUMNS = """
    id, name, party, position, political_party, election_count, committee,
    address, phone, email, website, blog_url, bio, notes, photo_url, photo_id,
    term_start, term_end, is_active
"""

MEMBER_WRITABLE = (
    "name",
    "party",
    "position",
    "political_party",
    "election_count",
    "committee",
    "address",
    "phone",
    "email",
    "website",
    "blog_url",
    "bio",
    "notes",
    "photo_url",
    "photo_id",
    "term_start",
    "term_end",
    "is_active",
)


async def list_members(*, active_only: bool = False) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {MEMBER_COLUMNS}
        FROM council_members
        WHERE ($1::boolean = false OR is_active = true)
        ORDER BY id DESC
        """,
        active_only,
    )


async def get_member(member_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"SELECT {MEMBER_COLUMNS} FROM council_members WHERE id = $1",
        member_id,
    )


async def create_member(fields: dict[str, Any]) -> dict[str, Any]:
    columns = [name for name in MEMBER_WRITABLE if name in fields]
    placeholders = ", ".join(f"${i}" for i in range(1, len(columns) + 1))
    row = await db.fetch_one(
        f"""
        INSERT INTO council_members ({", ".join(columns)})
        VALUES ({placeholders})
        RETURNING {MEMBER_COLUMNS}
        """,
        *[fields[name] for name in columns],
    )
    if row is None:
        raise RuntimeError("Failed to create council member.")
    return row


async def update_member(member_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
    columns = [name for name in MEMBER_WRITABLE if name in fields]
    if not columns:
        return await get_member(member_id)
    clause = ", ".join(f"{name} = ${i}" for i, name in enumerate(columns, start=2))
    return await db.fetch_one(
        f"UPDATE council_members SET {clause} WHERE id = $1 RETURNING {MEMBER_COLUMNS}",
        member_id,
        *[fields[name] for name in columns],
    )


async def delete_member(member_id: int) -> bool:
    status_tag = await db.execute("DELETE FROM council_members WHERE id = $1", member_id)
    return db.affected_rows(status_tag) > 0


async def like_counts_for_member(member_id: int) -> dict[int, int]:
    """question_id -> like count for every question of the member."""
    rows = await db.fetch_all(
        """
        SELECT q.id AS question_id, count(l.id) AS like_count
        FROM questions q
        LEFT JOIN likes l ON l.question_id = q.id
        WHERE q.council_member_id = $1
        GROUP BY q.id
        """,
        member_id,
    )
    return {int(r["question_id"]): int(r["like_count"]) for r in rows}
