"""
Shared Pydantic base for wire models.

Request and response bodies use camelCase keys on the wire (the SPA's
contract) while Python code keeps snake_case attribute names.
"""

from __future__ import annotations

import time

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def now_ms() -> int:
    # Domain timestamps are epoch milliseconds.
    return int(time.time() * 1000)
