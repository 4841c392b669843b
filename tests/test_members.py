from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi import HTTPException

from members import service

YEAR_MS = 365 * 24 * 60 * 60 * 1000


def test_within_term_bounds():
    member = {"term_start": 100, "term_end": 200}

    assert service.within_term(member, 100)
    assert service.within_term(member, 200)
    assert not service.within_term(member, 99)
    assert not service.within_term(member, 201)
    assert service.within_term({"term_start": 100, "term_end": None}, 10**15)


def test_member_list_resolves_photo_from_storage_first(client, store):
    store.add_member("写真なし")
    store.add_member("直接URL", photo_url="https://cdn.example/a.jpg")
    store.add_member("保存済み", photo_id="uploads/p1", photo_url="https://cdn.example/old.jpg")

    members = {m["name"]: m for m in client.get("/members").json()}
    assert members["写真なし"]["memberPhotoUrl"] is None
    assert members["直接URL"]["memberPhotoUrl"] == "https://cdn.example/a.jpg"
    assert members["保存済み"]["memberPhotoUrl"].startswith("https://storage.test/test-bucket/uploads/p1")


def test_active_only_filter(client, store):
    store.add_member("現職")
    store.add_member("元職", is_active=False)

    names = [m["name"] for m in client.get("/members", params={"activeOnly": "true"}).json()]
    assert names == ["現職"]


def test_unknown_member_reads_as_null(client, store):
    assert client.get("/members/5150").json() is None


@pytest.mark.anyio
async def test_member_stats_only_count_questions_inside_the_term(store):
    now_ms = int(datetime.now(timezone.utc).timestamp() * 1000)
    member = store.add_member("山田太郎", term_start=now_ms - 2 * YEAR_MS, term_end=None)
    before_term = store.add_question(member, "任期前", session_date=now_ms - 3 * YEAR_MS, category="教育")
    inside = store.add_question(member, "任期中", session_date=now_ms - YEAR_MS, category="福祉")
    store.add_question(member, "任期中2", session_date=now_ms - YEAR_MS, category="福祉")
    store.add_like(1, before_term["id"])
    store.add_like(1, inside["id"])

    stats = await service.member_stats(member["id"])

    assert stats.total_questions == 2
    assert stats.total_likes == 1
    assert [(c.name, c.count) for c in stats.categories] == [("福祉", 2)]


@pytest.mark.anyio
async def test_member_stats_unknown_member(store):
    with pytest.raises(HTTPException) as exc:
        await service.member_stats(31337)
    assert exc.value.status_code == 404


@pytest.mark.anyio
async def test_member_rankings_exclude_chairpersons(store):
    chair = store.add_member("議長さん", position="議長")
    regular = store.add_member("一般議員", party="A党")
    store.add_question(chair, "q1", session_date=10)
    store.add_question(regular, "q2", session_date=10)

    result = await service.member_rankings(storage=None)

    assert [r.member.name for r in result.rankings] == ["一般議員"]
    assert [(e.member.name, e.reason) for e in result.excluded_members] == [("議長さん", "議長")]


@pytest.mark.anyio
async def test_party_rankings_group_unaffiliated(store):
    a = store.add_member("A1", party="A党")
    store.add_member("無所属1")
    store.add_question(a, "q", session_date=10)

    parties = {p.name: p for p in await service.party_rankings()}
    assert parties["A党"].total_questions == 1
    assert parties["無所属"].member_count == 1
