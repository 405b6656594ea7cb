"""
Pydantic response schemas for the API.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    transactions: int
    categories: int
    date_range: str


class CategoriesResponse(BaseModel):
    categories: list[str]
    adjustable: list[str]
    default_config: dict[str, float]


class CategoryBreakdown(BaseModel):
    category: str
    spent: float
    projected_spend: float
    saved: float
    transactions: int
    percentage: float
    pct_of_spend: float


class SummaryResponse(BaseModel):
    transactions: int
    final_balance: float
    projected_balance: float
    total_saved: float
    total_income: float
    total_spent: float
    adjusted_debits: int
    by_category: list[CategoryBreakdown]


class ReloadResponse(BaseModel):
    status: str
    transactions: int
    message: Optional[str] = None
