from .service import BudgetReportingService
from .models import (
    BudgetSummary,
    CategoryRollupRow,
    PhaseRollupRow,
    StatusRollupRow,
    VersionTrendPoint,
)
from .rollups import (
    STATUS_GROUPS,
    budget_summary,
    category_rollup,
    phase_rollup,
    status_rollup,
    version_trend,
)

__all__ = [
    "BudgetReportingService",
    "BudgetSummary",
    "CategoryRollupRow",
    "PhaseRollupRow",
    "StatusRollupRow",
    "VersionTrendPoint",
    "STATUS_GROUPS",
    "budget_summary",
    "category_rollup",
    "phase_rollup",
    "status_rollup",
    "version_trend",
]
