from __future__ import annotations

from enum import Enum


class BudgetItemStatus(str, Enum):
    ESTIMATED = "estimated"
    COMMITTED = "committed"
    SPENT = "spent"
    PAID = "paid"


class BudgetPhase(str, Enum):
    PRE_PRODUCTION = "pre-production"
    PRODUCTION = "production"
    POST_PRODUCTION = "post-production"
    WRAP = "wrap"
    OTHER = "other"


__all__ = ["BudgetItemStatus", "BudgetPhase"]
