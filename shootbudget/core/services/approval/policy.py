from __future__ import annotations

from typing import Callable

from shootbudget.core.domain import BudgetApproval
from shootbudget.core.services.auth.session import UserSessionPrincipal

# Decides whether a principal may move an approval out of pending.
ReviewerPredicate = Callable[[UserSessionPrincipal, BudgetApproval], bool]

REVIEW_PERMISSION = "budget.approval.decide"


def default_reviewer_predicate(principal: UserSessionPrincipal, approval: BudgetApproval) -> bool:
    return REVIEW_PERMISSION in principal.permissions


__all__ = ["ReviewerPredicate", "REVIEW_PERMISSION", "default_reviewer_predicate"]
