from __future__ import annotations

from core.schemas import CamelModel


class LikeState(CamelModel):
    liked: bool
    like_count: int
