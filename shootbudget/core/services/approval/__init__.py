from shootbudget.core.services.approval.policy import (
    REVIEW_PERMISSION,
    ReviewerPredicate,
    default_reviewer_predicate,
)
from shootbudget.core.services.approval.service import BudgetApprovalService, as_approval_status

__all__ = [
    "BudgetApprovalService",
    "as_approval_status",
    "ReviewerPredicate",
    "REVIEW_PERMISSION",
    "default_reviewer_predicate",
]
