from __future__ import annotations

from typing import List

from shootbudget.core.interfaces import BudgetLineRepository, BudgetVersionRepository
from shootbudget.core.services.reporting.models import (
    BudgetSummary,
    CategoryRollupRow,
    PhaseRollupRow,
    StatusRollupRow,
    VersionTrendPoint,
)
from shootbudget.core.services.reporting.rollups import (
    budget_summary,
    category_rollup,
    phase_rollup,
    status_rollup,
    version_trend,
)
from shootbudget.core.services.versioning.policy import version_history_limit


class BudgetReportingService:
    """Read-only views over the live budget and the stored version history."""

    def __init__(
        self,
        budget_repo: BudgetLineRepository,
        version_repo: BudgetVersionRepository,
    ):
        self._budget_repo: BudgetLineRepository = budget_repo
        self._version_repo: BudgetVersionRepository = version_repo

    def get_category_rollup(self, project_id: str) -> List[CategoryRollupRow]:
        return category_rollup(
            self._budget_repo.list_categories(project_id),
            self._budget_repo.list_items(project_id),
        )

    def get_status_rollup(self, project_id: str) -> List[StatusRollupRow]:
        return status_rollup(self._budget_repo.list_items(project_id))

    def get_phase_rollup(self, project_id: str) -> List[PhaseRollupRow]:
        return phase_rollup(
            self._budget_repo.list_categories(project_id),
            self._budget_repo.list_items(project_id),
        )

    def get_version_trend(self, project_id: str) -> List[VersionTrendPoint]:
        versions = self._version_repo.list_for_project(project_id, limit=version_history_limit())
        return version_trend(versions)

    def get_budget_summary(self, project_id: str) -> BudgetSummary:
        return budget_summary(
            self._budget_repo.list_categories(project_id),
            self._budget_repo.list_items(project_id),
        )


__all__ = ["BudgetReportingService"]
