from __future__ import annotations

from typing import Literal

from core.schemas import CamelModel

AgeGroup = Literal["10代", "20代", "30代", "40代", "50代", "60代", "70代以上"]
Gender = Literal["男性", "女性", "その他", "回答しない"]
Region = Literal["三原市民", "その他市民"]


class DemographicsRequest(CamelModel):
    age_group: AgeGroup
    gender: Gender
    region: Region


class Demographics(CamelModel):
    user_id: int
    age_group: AgeGroup
    gender: Gender
    region: Region
    registered_at: int


class DemographicsStats(CamelModel):
    total_users: int
    demographics_completed: int
    demographics_completion_rate: float
    age_group_stats: dict[str, int]
    gender_stats: dict[str, int]
    region_stats: dict[str, int]
    monthly_registrations: dict[str, int]
    last_updated: int
