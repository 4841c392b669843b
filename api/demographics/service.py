"""
Self-reported user demographics and the admin aggregate.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from core.config import stats_timezone
from core.schemas import now_ms

from . import repository, schemas

logger = logging.getLogger(__name__)

# Rolling window for the monthly registration histogram.
MONTHLY_WINDOW_MS = 12 * 30 * 24 * 60 * 60 * 1000


async def save(user_id: int, payload: schemas.DemographicsRequest) -> schemas.Demographics:
    row = await repository.upsert(
        user_id=user_id,
        age_group=payload.age_group,
        gender=payload.gender,
        region=payload.region,
        registered_at=now_ms(),
    )
    logger.info("demographics_saved user_id=%s", user_id)
    return schemas.Demographics.model_validate(row)


async def get_own(user_id: int | None) -> schemas.Demographics | None:
    if user_id is None:
        return None
    row = await repository.get_for_user(user_id)
    return schemas.Demographics.model_validate(row) if row else None


def _month_key(epoch_ms: int) -> str:
    local = datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc).astimezone(ZoneInfo(stats_timezone()))
    return f"{local.year}-{local.month:02d}"


async def statistics() -> schemas.DemographicsStats:
    rows = await repository.list_all()
    total_users = await repository.count_users()
    now = now_ms()

    return schemas.DemographicsStats(
        total_users=total_users,
        demographics_completed=len(rows),
        demographics_completion_rate=(len(rows) / total_users * 100) if total_users else 0.0,
        age_group_stats=dict(Counter(r["age_group"] for r in rows)),
        gender_stats=dict(Counter(r["gender"] for r in rows)),
        region_stats=dict(Counter(r["region"] for r in rows)),
        monthly_registrations=dict(
            Counter(_month_key(r["registered_at"]) for r in rows if r["registered_at"] >= now - MONTHLY_WINDOW_MS)
        ),
        last_updated=now,
    )
