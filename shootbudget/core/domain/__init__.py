from shootbudget.core.domain.approval import (
    ALLOWED_TRANSITIONS,
    TERMINAL_STATUSES,
    ApprovalComment,
    ApprovalStatus,
    BudgetApproval,
)
from shootbudget.core.domain.audit import AuditAction, AuditLogEntry
from shootbudget.core.domain.budget import BudgetCategory, BudgetItem, budget_totals
from shootbudget.core.domain.enums import BudgetItemStatus, BudgetPhase
from shootbudget.core.domain.identifiers import clean_id, generate_id
from shootbudget.core.domain.version import BudgetVersion, CategorySnapshot, ItemSnapshot

__all__ = [
    "generate_id",
    "clean_id",
    "BudgetItemStatus",
    "BudgetPhase",
    "BudgetCategory",
    "BudgetItem",
    "budget_totals",
    "CategorySnapshot",
    "ItemSnapshot",
    "BudgetVersion",
    "ApprovalStatus",
    "ApprovalComment",
    "BudgetApproval",
    "TERMINAL_STATUSES",
    "ALLOWED_TRANSITIONS",
    "AuditAction",
    "AuditLogEntry",
]
