from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable

from shootbudget.core.domain.budget import BudgetCategory, BudgetItem, budget_totals
from shootbudget.core.domain.identifiers import generate_id


class ApprovalStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    REVISION_REQUESTED = "revision_requested"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({ApprovalStatus.APPROVED, ApprovalStatus.REJECTED})

# Reviewer decisions. Nothing returns to pending; after a revision request the
# submitter opens a new approval, though a reviewer may still approve or reject
# the old one when they name revision_requested as the expected status.
ALLOWED_TRANSITIONS: dict[ApprovalStatus, frozenset[ApprovalStatus]] = {
    ApprovalStatus.PENDING: frozenset(
        {
            ApprovalStatus.APPROVED,
            ApprovalStatus.REJECTED,
            ApprovalStatus.REVISION_REQUESTED,
        }
    ),
    ApprovalStatus.APPROVED: frozenset(),
    ApprovalStatus.REJECTED: frozenset(),
    ApprovalStatus.REVISION_REQUESTED: frozenset(
        {
            ApprovalStatus.APPROVED,
            ApprovalStatus.REJECTED,
        }
    ),
}


@dataclass(frozen=True)
class ApprovalComment:
    id: str
    user_id: str
    user_name: str
    message: str
    created_at: datetime

    @staticmethod
    def create(user_id: str, user_name: str, message: str) -> "ApprovalComment":
        return ApprovalComment(
            id=generate_id(),
            user_id=user_id,
            user_name=user_name,
            message=message,
            created_at=datetime.now(timezone.utc),
        )


@dataclass
class BudgetApproval:
    id: str
    project_id: str
    title: str
    submitted_by: str
    submitted_by_name: str
    submitted_at: datetime
    total_estimated: float
    total_actual: float
    category_count: int
    item_count: int
    description: str = ""
    status: ApprovalStatus = ApprovalStatus.PENDING
    reviewed_by: str | None = None
    reviewed_by_name: str | None = None
    reviewed_at: datetime | None = None
    previous_total: float | None = None
    comments: list[ApprovalComment] = field(default_factory=list)
    affected_categories: list[str] = field(default_factory=list)
    changes_summary: str = ""
    version: int = 1

    @property
    def estimated_change(self) -> float | None:
        if self.previous_total is None:
            return None
        return self.total_estimated - self.previous_total

    @staticmethod
    def submit(
        project_id: str,
        title: str,
        categories: Iterable[BudgetCategory],
        items: Iterable[BudgetItem],
        *,
        submitted_by: str,
        submitted_by_name: str,
        description: str | None = None,
        previous_total: float | None = None,
    ) -> "BudgetApproval":
        category_rows = list(categories)
        item_rows = list(items)
        total_estimated, total_actual = budget_totals(item_rows)
        return BudgetApproval(
            id=generate_id(),
            project_id=project_id,
            title=title,
            description=(description or "").strip(),
            submitted_by=submitted_by,
            submitted_by_name=submitted_by_name,
            submitted_at=datetime.now(timezone.utc),
            total_estimated=total_estimated,
            total_actual=total_actual,
            category_count=len(category_rows),
            item_count=len(item_rows),
            previous_total=previous_total,
            affected_categories=[c.name for c in category_rows],
            changes_summary=f"{len(category_rows)} categories, {len(item_rows)} line items",
        )


__all__ = [
    "ApprovalStatus",
    "ApprovalComment",
    "BudgetApproval",
    "TERMINAL_STATUSES",
    "ALLOWED_TRANSITIONS",
]
