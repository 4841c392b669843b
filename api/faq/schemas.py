from __future__ import annotations

from pydantic import Field

from core.schemas import CamelModel


class FAQItem(CamelModel):
    id: int
    question: str
    answer: str
    category: str
    order: int
    is_published: bool
    created_at: int
    updated_at: int | None = None


class FAQGroup(CamelModel):
    category: str
    items: list[FAQItem]


class FAQRequest(CamelModel):
    question: str = Field(..., min_length=1, max_length=500)
    answer: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1, max_length=100)
    order: int = 0
    is_published: bool = True
