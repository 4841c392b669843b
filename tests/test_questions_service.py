from __future__ import annotations

import pytest
from fastapi import HTTPException

from questions import filters, service

pytestmark = pytest.mark.anyio


@pytest.fixture
def seeded(store):
    yamada = store.add_member("山田太郎", party="A党")
    sato = store.add_member("佐藤花子", position="議長")
    q1 = store.add_question(yamada, "学校給食について", session_date=100, category="教育")
    q2 = store.add_question(sato, "防災計画の見直し", session_date=300, category="防災")
    q3 = store.add_question(yamada, "Budget review", session_date=200, category="財政", session_number="第2回")
    q4 = store.add_question(yamada, "図書館の開館時間", session_date=400, category="教育")
    store.add_response(q1["id"])
    store.add_response(q1["id"])
    store.add_like(101, q1["id"])
    store.add_like(102, q1["id"])
    store.add_like(101, q3["id"])
    return {"yamada": yamada, "sato": sato, "questions": [q1, q2, q3, q4]}


async def test_enrichment_joins_member_responses_and_likes(store, seeded):
    q1 = seeded["questions"][0]
    enriched = await service.get_question(q1["id"], caller_id=101)

    assert enriched.member_name == "山田太郎"
    assert enriched.member_party == "A党"
    assert enriched.response_count == 2
    assert enriched.like_count == 2
    assert enriched.is_liked is True


async def test_is_liked_is_false_without_caller(store, seeded):
    questions = await service.list_questions(filters.QuestionFilters(), caller_id=None)

    assert questions
    assert all(q.is_liked is False for q in questions)


async def test_missing_member_falls_back_to_unknown_name(store, seeded):
    orphan = store.add_question({"id": 9999}, "孤立した質問", session_date=50)
    enriched = await service.get_question(orphan["id"], caller_id=None)

    assert enriched.member_name == service.UNKNOWN_MEMBER
    assert enriched.member_party is None


async def test_get_question_returns_none_when_missing(store):
    assert await service.get_question(12345, caller_id=None) is None


async def test_list_questions_uses_session_index_order(store, seeded):
    questions = await service.list_questions(filters.QuestionFilters(), caller_id=None)
    assert [q.session_date for q in questions] == [400, 300, 200, 100]


async def test_paged_search_counts_and_slices(store, seeded):
    page = await service.search_questions_paged(filters.QuestionFilters(), page=2, page_size=3, caller_id=None)

    assert page.pagination.total_count == 4
    assert page.pagination.total_pages == 2
    assert page.pagination.has_prev_page is True
    assert page.pagination.has_next_page is False
    assert [q.session_date for q in page.questions] == [100]


async def test_paged_search_rejects_page_zero(store, seeded):
    with pytest.raises(HTTPException) as exc:
        await service.search_questions_paged(filters.QuestionFilters(), page=0, page_size=3, caller_id=None)
    assert exc.value.status_code == 400


@pytest.mark.parametrize(
    "question_filters",
    [
        filters.QuestionFilters(),
        filters.QuestionFilters(category="教育"),
        filters.QuestionFilters(search_term="budget"),
        filters.QuestionFilters(session_number="第2回"),
    ],
)
async def test_paged_results_are_an_ordered_subset_of_the_full_list(store, seeded, question_filters):
    full = await service.list_questions(question_filters, caller_id=None)
    paged = await service.search_questions_paged(question_filters, page=1, page_size=2, caller_id=None)

    full_ids = [q.id for q in full]
    paged_ids = [q.id for q in paged.questions]
    assert set(paged_ids) <= set(full_ids)
    assert paged_ids == [qid for qid in full_ids if qid in paged_ids]


async def test_member_filter_uses_member_index_order(store, seeded):
    yamada = seeded["yamada"]
    page = await service.search_questions_paged(
        filters.QuestionFilters(member_id=yamada["id"]), page=1, page_size=10, caller_id=None
    )
    own = [q["id"] for q in seeded["questions"] if q["council_member_id"] == yamada["id"]]
    # Creation order, newest first.
    assert [q.id for q in page.questions] == sorted(own, reverse=True)


async def test_cursor_pagination_walks_every_question_once(store, seeded):
    seen: list[int] = []
    cursor = None
    while True:
        page = await service.list_questions_paginated(cursor=cursor, num_items=3, caller_id=None)
        seen.extend(q.id for q in page.page)
        if page.is_done:
            break
        cursor = page.continue_cursor

    assert len(seen) == len(set(seen)) == 4


async def test_cursor_pagination_filters_after_paging(store, seeded):
    page = await service.list_questions_paginated(cursor=None, num_items=2, category="教育", caller_id=None)

    # The first storage page (session 400, 300) holds only one 教育 question.
    assert [q.session_date for q in page.page] == [400]
    assert page.is_done is False


async def test_malformed_cursor_is_a_bad_request(store, seeded):
    with pytest.raises(HTTPException) as exc:
        await service.list_questions_paginated(cursor="not-a-cursor!", num_items=2, caller_id=None)
    assert exc.value.status_code == 400


async def test_browse_searches_member_names_and_sorts_by_likes(store, seeded):
    page = await service.browse_questions(
        filters.QuestionFilters(search_term="山田"), page=1, page_size=10, sort_by="likes", caller_id=None
    )
    assert [q.like_count for q in page.questions] == [2, 1, 0]


async def test_stats_and_categories(store, seeded):
    store.questions[seeded["questions"][0]["id"]]["status"] = "answered"
    stats = await service.stats()

    assert stats.total_questions == 4
    assert stats.answered_questions == 1
    assert stats.answer_rate == 25
    assert stats.total_responses == 2
    assert stats.category_stats == {"教育": 2, "防災": 1, "財政": 1}
    assert await service.categories() == sorted(["教育", "防災", "財政"])
    assert await service.session_numbers() == ["第2回"]


async def test_ranking_overview_separates_chairpersons(store, seeded):
    overview = await service.ranking_overview(limit=10, caller_id=None)

    assert sum(m.question_count for m in overview.member_question_counts) == 4
    assert [m.name for m in overview.regular_members] == ["山田太郎"]
    assert [m.name for m in overview.chairperson_members] == ["佐藤花子"]
    assert overview.regular_members[0].badge == "🥇"
    assert overview.top_liked_questions[0].like_count == 2


async def test_delete_question_removes_responses_and_likes(store, seeded):
    q1 = seeded["questions"][0]
    await service.delete_question(q1["id"], admin_user_id=1)

    assert q1["id"] not in store.questions
    assert not [r for r in store.responses.values() if r["question_id"] == q1["id"]]
    assert not [like for like in store.likes if like["question_id"] == q1["id"]]


async def test_delete_missing_question_is_not_found(store):
    with pytest.raises(HTTPException) as exc:
        await service.delete_question(777, admin_user_id=1)
    assert exc.value.status_code == 404


async def test_top_liked_and_recent(store, seeded):
    q1, _, q3, q4 = seeded["questions"]

    top = await service.top_liked_questions(limit=2, caller_id=None)
    recent = await service.recent_questions(limit=1, caller_id=None)

    assert [q.id for q in top] == [q1["id"], q3["id"]]
    assert [q.id for q in recent] == [q4["id"]]


async def test_answer_rate_rounds_halves_up(store):
    member = store.add_member("山田太郎")
    for i in range(8):
        store.add_question(member, f"質問 {i}", session_date=i, status="answered" if i < 5 else "pending")

    assert (await service.stats()).answer_rate == 63


async def test_answer_rate_one_in_eight(store):
    member = store.add_member("山田太郎")
    for i in range(8):
        store.add_question(member, f"質問 {i}", session_date=i, status="answered" if i == 0 else "pending")

    assert (await service.stats()).answer_rate == 13


async def test_top_liked_ties_keep_creation_order(store):
    member = store.add_member("山田太郎")
    older = store.add_question(member, "古い質問", session_date=100)
    newer = store.add_question(member, "新しい質問", session_date=900)
    store.add_like(101, older["id"])
    store.add_like(101, newer["id"])

    top = await service.top_liked_questions(limit=2, caller_id=None)

    assert [q.id for q in top] == [older["id"], newer["id"]]


async def test_limit_applies_after_likes_sort(store, seeded):
    q1 = seeded["questions"][0]

    questions = await service.list_questions(
        filters.QuestionFilters(), caller_id=None, sort_by="likes", limit=1
    )

    assert [q.id for q in questions] == [q1["id"]]


async def test_limit_applies_after_date_sort(store, seeded):
    questions = await service.list_questions(
        filters.QuestionFilters(), caller_id=None, sort_by="oldest", limit=2
    )

    assert [q.session_date for q in questions] == [100, 200]
