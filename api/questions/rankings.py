"""
Member / party / category aggregation behind the rankings view.

Pure functions over the full member list and the full enriched question
list. All sorts are stable, so ties keep input order.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Iterable

CHAIRPERSON_MARKERS = ("議長", "副議長")
UNAFFILIATED = "無所属"
DEFAULT_RANKING_LIMIT = 10
DEFAULT_PARTY_LIMIT = 8
DEFAULT_CATEGORY_LIMIT = 8

_MEDALS = ("🥇", "🥈", "🥉")


def is_chairperson(member: dict[str, Any]) -> bool:
    position = str(member.get("position") or "").lower()
    return any(marker in position for marker in CHAIRPERSON_MARKERS)


def party_of(member: dict[str, Any]) -> str:
    return member.get("party") or UNAFFILIATED


def _questions_by_member(questions: Iterable[dict[str, Any]]) -> dict[Any, list[dict[str, Any]]]:
    grouped: dict[Any, list[dict[str, Any]]] = {}
    for question in questions:
        grouped.setdefault(question.get("council_member_id"), []).append(question)
    return grouped


def member_question_counts(
    members: list[dict[str, Any]],
    questions: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    grouped = _questions_by_member(questions)
    counts = []
    for member in members:
        own = grouped.get(member.get("id"), [])
        counts.append(
            {
                **member,
                "question_count": len(own),
                "total_likes": sum(int(q.get("like_count") or 0) for q in own),
                "is_chairperson": is_chairperson(member),
            }
        )
    return counts


def split_members(counts: list[dict[str, Any]]) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """
    (regular, chairpersons), each ordered by question count desc.
    Chairpersons never appear in the regular leaderboard.
    """
    regular = [m for m in counts if not m["is_chairperson"]]
    chairs = [m for m in counts if m["is_chairperson"]]
    return (
        sorted(regular, key=lambda m: m["question_count"], reverse=True),
        sorted(chairs, key=lambda m: m["question_count"], reverse=True),
    )


def like_rankings(regular: list[dict[str, Any]], limit: int | None = DEFAULT_RANKING_LIMIT) -> list[dict[str, Any]]:
    ranked = sorted(regular, key=lambda m: m["total_likes"], reverse=True)
    return ranked if limit is None else ranked[:limit]


def party_stats(
    members: list[dict[str, Any]],
    questions: list[dict[str, Any]],
    limit: int | None = None,
) -> list[dict[str, Any]]:
    grouped = _questions_by_member(questions)
    stats: dict[str, dict[str, Any]] = {}
    for member in members:
        party = party_of(member)
        bucket = stats.setdefault(
            party,
            {"party": party, "member_count": 0, "question_count": 0, "total_likes": 0},
        )
        own = grouped.get(member.get("id"), [])
        bucket["member_count"] += 1
        bucket["question_count"] += len(own)
        bucket["total_likes"] += sum(int(q.get("like_count") or 0) for q in own)

    ranked = sorted(stats.values(), key=lambda p: p["question_count"], reverse=True)
    return ranked if limit is None else ranked[:limit]


def category_stats(questions: Iterable[dict[str, Any]], limit: int | None = DEFAULT_CATEGORY_LIMIT) -> list[dict[str, Any]]:
    counter = Counter(q.get("category") for q in questions)
    # Counter keeps first-seen order, sorted() keeps it for ties.
    ranked = sorted(
        ({"category": category, "count": count} for category, count in counter.items()),
        key=lambda c: c["count"],
        reverse=True,
    )
    return ranked if limit is None else ranked[:limit]


def rank_badge(index: int) -> str:
    """Display badge for a zero-based rank position."""
    if 0 <= index < len(_MEDALS):
        return _MEDALS[index]
    return f"{index + 1}位"


def top_liked(questions: Iterable[dict[str, Any]], limit: int = DEFAULT_RANKING_LIMIT) -> list[dict[str, Any]]:
    return sorted(questions, key=lambda q: int(q.get("like_count") or 0), reverse=True)[:limit]
