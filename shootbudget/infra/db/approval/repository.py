from __future__ import annotations

from collections import defaultdict
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from shootbudget.core.domain import ApprovalComment, ApprovalStatus, BudgetApproval
from shootbudget.core.interfaces import BudgetApprovalRepository
from shootbudget.infra.db.approval.mapper import (
    approval_from_orm,
    approval_to_orm,
    comment_to_orm,
)
from shootbudget.infra.db.models import ApprovalCommentORM, BudgetApprovalORM
from shootbudget.infra.db.optimistic import update_with_version_check


class SqlAlchemyBudgetApprovalRepository(BudgetApprovalRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, approval: BudgetApproval) -> None:
        self.session.add(approval_to_orm(approval))
        for comment in approval.comments:
            self.session.add(comment_to_orm(approval.id, comment))

    def get(self, approval_id: str) -> Optional[BudgetApproval]:
        obj = self.session.get(BudgetApprovalORM, approval_id)
        if obj is None:
            return None
        return approval_from_orm(obj, self._comments_for([approval_id]).get(approval_id, []))

    def list_for_project(
        self,
        project_id: str,
        *,
        status: ApprovalStatus | None = None,
        limit: int = 200,
    ) -> List[BudgetApproval]:
        stmt = select(BudgetApprovalORM).where(BudgetApprovalORM.project_id == project_id)
        if status is not None:
            stmt = stmt.where(BudgetApprovalORM.status == status.value)
        stmt = stmt.order_by(BudgetApprovalORM.submitted_at.desc()).limit(max(1, int(limit)))
        rows = self.session.execute(stmt).scalars().all()
        comments = self._comments_for([row.id for row in rows])
        return [approval_from_orm(row, comments.get(row.id, [])) for row in rows]

    def count_for_project(self, project_id: str, *, status: ApprovalStatus | None = None) -> int:
        stmt = select(func.count()).select_from(BudgetApprovalORM).where(
            BudgetApprovalORM.project_id == project_id
        )
        if status is not None:
            stmt = stmt.where(BudgetApprovalORM.status == status.value)
        return int(self.session.execute(stmt).scalar_one())

    def update_review(
        self,
        approval: BudgetApproval,
        *,
        expected_version: int,
        expected_status: ApprovalStatus,
    ) -> int:
        return update_with_version_check(
            self.session,
            BudgetApprovalORM,
            approval.id,
            expected_version,
            {
                "status": approval.status.value,
                "reviewed_by": approval.reviewed_by,
                "reviewed_by_name": approval.reviewed_by_name,
                "reviewed_at": approval.reviewed_at,
            },
            not_found_message="Budget approval not found.",
            stale_message="Budget approval was reviewed by another user.",
            extra_conditions=(BudgetApprovalORM.status == expected_status.value,),
        )

    def append_comment(self, approval_id: str, comment: ApprovalComment) -> None:
        self.session.add(comment_to_orm(approval_id, comment))

    def delete(self, approval_id: str) -> bool:
        # status is re-checked in the DELETE itself; a decision that lands after
        # the caller's read leaves the row and its thread untouched
        result = self.session.execute(
            delete(BudgetApprovalORM)
            .where(
                BudgetApprovalORM.id == approval_id,
                BudgetApprovalORM.status != ApprovalStatus.APPROVED.value,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return False
        self.session.execute(
            delete(ApprovalCommentORM)
            .where(ApprovalCommentORM.approval_id == approval_id)
            .execution_options(synchronize_session=False)
        )
        return True

    def exists(self, approval_id: str) -> bool:
        stmt = select(BudgetApprovalORM.id).where(BudgetApprovalORM.id == approval_id)
        return self.session.execute(stmt).first() is not None

    def _comments_for(self, approval_ids: List[str]) -> dict[str, list[ApprovalCommentORM]]:
        if not approval_ids:
            return {}
        stmt = (
            select(ApprovalCommentORM)
            .where(ApprovalCommentORM.approval_id.in_(approval_ids))
            .order_by(ApprovalCommentORM.seq)
        )
        grouped: dict[str, list[ApprovalCommentORM]] = defaultdict(list)
        for row in self.session.execute(stmt).scalars().all():
            grouped[row.approval_id].append(row)
        return grouped


__all__ = ["SqlAlchemyBudgetApprovalRepository"]
