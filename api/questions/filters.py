"""
Predicate, sort and pagination rules for council questions.

These are the only implementation of the filtering rules: the offset-paged
search, the cursor-paged listing, the full list behind the list view and the
rankings all call into this module, so they cannot drift apart.

Rows are plain dicts with the repository's snake_case keys. Enriched rows
additionally carry `member_name`, `like_count`, `response_count`, `is_liked`.
"""

from __future__ import annotations

import math
import unicodedata
from dataclasses import dataclass
from typing import Any, Iterable

SORT_NEWEST = "newest"
SORT_OLDEST = "oldest"
SORT_TITLE = "title"
SORT_LIKES = "likes"

SORT_KEYS = (SORT_NEWEST, SORT_OLDEST, SORT_TITLE, SORT_LIKES)

# Katakana block that maps 1:1 onto hiragana (ァ..ヶ -> ぁ..ゖ).
_KATAKANA_START = 0x30A1
_KATAKANA_END = 0x30F6
_KANA_OFFSET = 0x60


@dataclass(frozen=True)
class QuestionFilters:
    category: str | None = None
    member_id: int | None = None
    search_term: str | None = None
    session_number: str | None = None
    status: str | None = None


@dataclass(frozen=True)
class Pagination:
    current_page: int
    total_pages: int
    total_count: int
    page_size: int
    has_next_page: bool
    has_prev_page: bool


def matches_search(question: dict[str, Any], term: str | None, *, include_member_name: bool = False) -> bool:
    """
    Case-insensitive substring match on title or content (and member name
    for the list view). An empty term matches everything.
    """
    needle = (term or "").lower()
    if not needle:
        return True

    haystacks = [question.get("title"), question.get("content")]
    if include_member_name:
        haystacks.append(question.get("member_name"))
    return any(needle in str(value).lower() for value in haystacks if value)


def matches(question: dict[str, Any], filters: QuestionFilters, *, include_member_name: bool = False) -> bool:
    if filters.category and question.get("category") != filters.category:
        return False
    if filters.member_id is not None and question.get("council_member_id") != filters.member_id:
        return False
    if filters.session_number and question.get("session_number") != filters.session_number:
        return False
    if filters.status and question.get("status") != filters.status:
        return False
    return matches_search(question, filters.search_term, include_member_name=include_member_name)


def apply_filters(
    rows: Iterable[dict[str, Any]],
    filters: QuestionFilters,
    *,
    include_member_name: bool = False,
) -> list[dict[str, Any]]:
    """Keep matching rows in their original relative order."""
    return [row for row in rows if matches(row, filters, include_member_name=include_member_name)]


def collation_key(text: str | None) -> str:
    """
    Sort key approximating Japanese locale collation: width/compatibility
    forms folded (NFKC), katakana sorted with hiragana, case-insensitive.
    """
    normalized = unicodedata.normalize("NFKC", text or "")
    folded = "".join(
        chr(ord(ch) - _KANA_OFFSET) if _KATAKANA_START <= ord(ch) <= _KATAKANA_END else ch
        for ch in normalized
    )
    return folded.casefold()


def sort_questions(rows: Iterable[dict[str, Any]], sort_by: str | None) -> list[dict[str, Any]]:
    """
    Stable sort with no secondary key: ties keep input order. Unknown or
    missing sort keys return the rows unchanged.
    """
    items = list(rows)
    if sort_by == SORT_NEWEST:
        return sorted(items, key=lambda q: q.get("session_date") or 0, reverse=True)
    if sort_by == SORT_OLDEST:
        return sorted(items, key=lambda q: q.get("session_date") or 0)
    if sort_by == SORT_TITLE:
        return sorted(items, key=lambda q: collation_key(q.get("title")))
    if sort_by == SORT_LIKES:
        return sorted(items, key=lambda q: q.get("like_count") or 0, reverse=True)
    return items


def page_bounds(page: int, page_size: int) -> tuple[int, int]:
    if page < 1:
        raise ValueError("page must be >= 1")
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    start = (page - 1) * page_size
    return start, start + page_size


def paginate(rows: list[dict[str, Any]], *, page: int, page_size: int) -> tuple[list[dict[str, Any]], Pagination]:
    start, end = page_bounds(page, page_size)
    total_count = len(rows)
    total_pages = math.ceil(total_count / page_size)
    return rows[start:end], Pagination(
        current_page=page,
        total_pages=total_pages,
        total_count=total_count,
        page_size=page_size,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )


def refine(
    rows: Iterable[dict[str, Any]],
    filters: QuestionFilters,
    *,
    sort_by: str | None = None,
    include_member_name: bool = False,
) -> list[dict[str, Any]]:
    return sort_questions(
        apply_filters(rows, filters, include_member_name=include_member_name),
        sort_by,
    )


def distinct_sorted(values: Iterable[Any]) -> list[str]:
    return sorted({str(v) for v in values if v})
