from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class CategoryRollupRow:
    category_id: str
    category_name: str
    estimated: float
    actual: float
    variance: float
    variance_percent: float
    percent_of_total: float
    item_count: int


@dataclass
class StatusRollupRow:
    status: str
    estimated: float
    actual: float
    item_count: int


@dataclass
class PhaseRollupRow:
    phase: str
    estimated: float
    actual: float
    item_count: int


@dataclass
class VersionTrendPoint:
    version_id: str
    name: str
    created_at: datetime
    total_estimated: float
    total_actual: float
    change_from_previous: float


@dataclass
class BudgetSummary:
    total_estimated: float
    total_actual: float
    variance: float
    variance_percent: float
    category_count: int
    item_count: int
