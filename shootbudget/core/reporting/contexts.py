from dataclasses import dataclass
from datetime import datetime
from typing import List

from shootbudget.core.domain import BudgetVersion
from shootbudget.core.services.reporting import (
    BudgetSummary,
    CategoryRollupRow,
    StatusRollupRow,
)
from shootbudget.core.services.versioning import VersionDiff


@dataclass
class VersionExportContext:
    version: BudgetVersion
    summary: BudgetSummary
    categories: List[CategoryRollupRow]
    statuses: List[StatusRollupRow]
    generated_at: datetime


@dataclass
class ComparisonExportContext:
    version_a: BudgetVersion
    version_b: BudgetVersion
    diff: VersionDiff
    generated_at: datetime
