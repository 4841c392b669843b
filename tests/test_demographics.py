from __future__ import annotations

import pytest

from core.schemas import now_ms
from demographics import repository, service

pytestmark = pytest.mark.anyio

YEAR_MS = 400 * 24 * 60 * 60 * 1000


@pytest.fixture
def answers(monkeypatch):
    now = now_ms()
    rows = [
        {"user_id": 1, "age_group": "20代", "gender": "女性", "region": "三原市民", "registered_at": now},
        {"user_id": 2, "age_group": "20代", "gender": "男性", "region": "三原市民", "registered_at": now},
        {"user_id": 3, "age_group": "60代", "gender": "女性", "region": "その他市民", "registered_at": now - YEAR_MS},
    ]

    async def list_all():
        return rows

    async def count_users():
        return 6

    monkeypatch.setattr(repository, "list_all", list_all)
    monkeypatch.setattr(repository, "count_users", count_users)
    return rows


async def test_statistics_counts_every_answer(answers):
    stats = await service.statistics()

    assert stats.total_users == 6
    assert stats.demographics_completed == 3
    assert stats.demographics_completion_rate == pytest.approx(50.0)
    assert stats.age_group_stats == {"20代": 2, "60代": 1}
    assert stats.gender_stats == {"女性": 2, "男性": 1}
    assert stats.region_stats == {"三原市民": 2, "その他市民": 1}


async def test_monthly_histogram_skips_old_registrations(answers):
    stats = await service.statistics()

    assert sum(stats.monthly_registrations.values()) == 2


async def test_anonymous_caller_has_no_demographics():
    assert await service.get_own(None) is None
