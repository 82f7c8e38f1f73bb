from __future__ import annotations

import json
from typing import Iterable

from shootbudget.core.domain import ApprovalComment, ApprovalStatus, BudgetApproval
from shootbudget.infra.db.models import ApprovalCommentORM, BudgetApprovalORM
from shootbudget.infra.db.timestamps import as_utc


def _to_json(values: list[str]) -> str:
    return json.dumps(list(values), default=str, ensure_ascii=False)


def _from_json(raw: str | None) -> list[str]:
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        return []
    return [str(v) for v in value] if isinstance(value, list) else []


def approval_to_orm(approval: BudgetApproval) -> BudgetApprovalORM:
    return BudgetApprovalORM(
        id=approval.id,
        project_id=approval.project_id,
        title=approval.title,
        description=approval.description or "",
        status=approval.status.value,
        submitted_by=approval.submitted_by,
        submitted_by_name=approval.submitted_by_name,
        submitted_at=approval.submitted_at,
        reviewed_by=approval.reviewed_by,
        reviewed_by_name=approval.reviewed_by_name,
        reviewed_at=approval.reviewed_at,
        total_estimated=approval.total_estimated,
        total_actual=approval.total_actual,
        category_count=approval.category_count,
        item_count=approval.item_count,
        previous_total=approval.previous_total,
        affected_categories_json=_to_json(approval.affected_categories),
        changes_summary=approval.changes_summary or "",
        version=getattr(approval, "version", 1),
    )


def approval_from_orm(
    obj: BudgetApprovalORM,
    comments: Iterable[ApprovalCommentORM] = (),
) -> BudgetApproval:
    return BudgetApproval(
        id=obj.id,
        project_id=obj.project_id,
        title=obj.title,
        description=obj.description or "",
        status=ApprovalStatus(obj.status),
        submitted_by=obj.submitted_by,
        submitted_by_name=obj.submitted_by_name,
        submitted_at=as_utc(obj.submitted_at),
        reviewed_by=obj.reviewed_by,
        reviewed_by_name=obj.reviewed_by_name,
        reviewed_at=as_utc(obj.reviewed_at),
        total_estimated=obj.total_estimated,
        total_actual=obj.total_actual,
        category_count=obj.category_count,
        item_count=obj.item_count,
        previous_total=obj.previous_total,
        comments=[comment_from_orm(c) for c in comments],
        affected_categories=_from_json(obj.affected_categories_json),
        changes_summary=obj.changes_summary or "",
        version=getattr(obj, "version", 1),
    )


def comment_to_orm(approval_id: str, comment: ApprovalComment) -> ApprovalCommentORM:
    return ApprovalCommentORM(
        id=comment.id,
        approval_id=approval_id,
        user_id=comment.user_id,
        user_name=comment.user_name,
        message=comment.message,
        created_at=comment.created_at,
    )


def comment_from_orm(obj: ApprovalCommentORM) -> ApprovalComment:
    return ApprovalComment(
        id=obj.id,
        user_id=obj.user_id,
        user_name=obj.user_name,
        message=obj.message,
        created_at=as_utc(obj.created_at),
    )


__all__ = [
    "approval_to_orm",
    "approval_from_orm",
    "comment_to_orm",
    "comment_from_orm",
]
