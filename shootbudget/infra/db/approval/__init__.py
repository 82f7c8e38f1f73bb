from shootbudget.infra.db.approval.mapper import (
    approval_from_orm,
    approval_to_orm,
    comment_from_orm,
    comment_to_orm,
)
from shootbudget.infra.db.approval.repository import SqlAlchemyBudgetApprovalRepository

__all__ = [
    "approval_to_orm",
    "approval_from_orm",
    "comment_to_orm",
    "comment_from_orm",
    "SqlAlchemyBudgetApprovalRepository",
]
