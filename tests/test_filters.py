from __future__ import annotations

import math

import pytest

from questions import filters


def _q(qid: int, **fields) -> dict:
    return {
        "id": qid,
        "title": fields.get("title", f"question {qid}"),
        "content": fields.get("content", ""),
        "category": fields.get("category", "教育"),
        "council_member_id": fields.get("member_id", 1),
        "session_date": fields.get("session_date", 0),
        "session_number": fields.get("session_number"),
        "status": fields.get("status", "pending"),
        "like_count": fields.get("like_count", 0),
        "member_name": fields.get("member_name"),
    }


def test_sort_by_session_date_and_title():
    rows = [_q(1, session_date=100, title="B"), _q(2, session_date=200, title="A")]

    assert [q["session_date"] for q in filters.sort_questions(rows, "newest")] == [200, 100]
    assert [q["session_date"] for q in filters.sort_questions(rows, "oldest")] == [100, 200]
    assert [q["title"] for q in filters.sort_questions(rows, "title")] == ["A", "B"]


def test_sort_is_stable_and_unknown_key_keeps_order():
    rows = [_q(1, session_date=5), _q(2, session_date=5), _q(3, session_date=1)]

    assert [q["id"] for q in filters.sort_questions(rows, "newest")] == [1, 2, 3]
    assert [q["id"] for q in filters.sort_questions(rows, "bogus")] == [1, 2, 3]
    assert [q["id"] for q in filters.sort_questions(rows, None)] == [1, 2, 3]


def test_sort_by_likes_descending():
    rows = [_q(1, like_count=1), _q(2, like_count=4), _q(3, like_count=2)]
    assert [q["id"] for q in filters.sort_questions(rows, "likes")] == [2, 3, 1]


def test_title_collation_folds_katakana_and_width():
    rows = [_q(1, title="さくら"), _q(2, title="カメラ"), _q(3, title="ｱｲｽ")]
    # アイス (half-width) < カメラ < さくら in kana order
    assert [q["id"] for q in filters.sort_questions(rows, "title")] == [3, 2, 1]


def test_search_is_case_insensitive_substring_on_title_or_content():
    row = _q(1, title="Budget Review", content="school lunch")

    assert filters.matches_search(row, "budget")
    assert filters.matches_search(row, "LUNCH")
    assert not filters.matches_search(row, "parks")
    assert filters.matches_search(row, "")


def test_member_name_is_searched_only_in_list_view():
    row = _q(1, title="x", content="y", member_name="山田太郎")

    assert not filters.matches_search(row, "山田")
    assert filters.matches_search(row, "山田", include_member_name=True)


def test_apply_filters_combines_predicates_and_keeps_order():
    rows = [
        _q(1, category="教育", status="answered"),
        _q(2, category="福祉", status="answered"),
        _q(3, category="教育", status="pending", session_number="第1回"),
        _q(4, category="教育", status="answered", session_number="第1回"),
    ]

    picked = filters.apply_filters(rows, filters.QuestionFilters(category="教育", status="answered"))
    assert [q["id"] for q in picked] == [1, 4]

    picked = filters.apply_filters(rows, filters.QuestionFilters(session_number="第1回"))
    assert [q["id"] for q in picked] == [3, 4]


@pytest.mark.parametrize("total", [0, 1, 19, 20, 21, 45])
@pytest.mark.parametrize("page_size", [1, 7, 20])
def test_paginate_counts(total, page_size):
    rows = [_q(i) for i in range(total)]
    for page in (1, 2, 3):
        sliced, info = filters.paginate(rows, page=page, page_size=page_size)

        assert info.total_pages == math.ceil(total / page_size)
        assert len(sliced) == min(page_size, max(0, total - (page - 1) * page_size))
        assert info.has_prev_page is (page > 1)
        assert info.has_next_page is (page < info.total_pages)


def test_paginate_rejects_page_zero():
    with pytest.raises(ValueError):
        filters.paginate([], page=0, page_size=20)


def test_distinct_sorted_skips_empty_values():
    assert filters.distinct_sorted(["b", None, "a", "", "b"]) == ["a", "b"]
