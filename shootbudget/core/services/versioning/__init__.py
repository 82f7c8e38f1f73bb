from shootbudget.core.services.versioning.diff import compare_versions
from shootbudget.core.services.versioning.models import ChangedItem, VersionDiff
from shootbudget.core.services.versioning.policy import version_history_limit
from shootbudget.core.services.versioning.service import BudgetVersionService

__all__ = [
    "BudgetVersionService",
    "compare_versions",
    "ChangedItem",
    "VersionDiff",
    "version_history_limit",
]
