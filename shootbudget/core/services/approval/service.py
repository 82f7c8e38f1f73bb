from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable

from sqlalchemy.orm import Session

from shootbudget.core.domain import (
    ALLOWED_TRANSITIONS,
    AuditAction,
    ApprovalComment,
    ApprovalStatus,
    BudgetApproval,
    BudgetCategory,
    BudgetItem,
)
from shootbudget.core.events import BudgetEvents
from shootbudget.core.exceptions import (
    BusinessRuleError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from shootbudget.core.interfaces import BudgetApprovalRepository, BudgetLineRepository
from shootbudget.core.services.approval.policy import ReviewerPredicate, default_reviewer_predicate
from shootbudget.core.services.audit.helpers import record_audit
from shootbudget.core.services.auth.authorization import require_authenticated, require_permission
from shootbudget.core.services.auth.session import UserSessionContext

logger = logging.getLogger(__name__)


def as_approval_status(value: ApprovalStatus | str | None) -> ApprovalStatus | None:
    """Accepts the enum, its value, or its repr-ish name ('ApprovalStatus.PENDING')."""
    if value is None or isinstance(value, ApprovalStatus):
        return value
    raw = str(value).strip()
    if "." in raw:
        raw = raw.rsplit(".", 1)[-1]
    raw = raw.lower()
    if not raw:
        return None
    try:
        return ApprovalStatus(raw)
    except ValueError:
        raise ValidationError(f"Unknown approval status '{value}'.", code="APPROVAL_STATUS_INVALID")


class BudgetApprovalService:
    def __init__(
        self,
        session: Session,
        approval_repo: BudgetApprovalRepository,
        budget_repo: BudgetLineRepository | None = None,
        user_session: UserSessionContext | None = None,
        audit_service=None,
        events: BudgetEvents | None = None,
        reviewer_predicate: ReviewerPredicate | None = None,
    ):
        self._session = session
        self._approval_repo = approval_repo
        self._budget_lines = budget_repo
        self._user_session = user_session
        self._audit_service = audit_service
        self._events = events
        self._reviewer_predicate = reviewer_predicate or default_reviewer_predicate

    # ---------------- submission ----------------

    def submit_for_approval(
        self,
        project_id: str,
        categories: Iterable[BudgetCategory],
        items: Iterable[BudgetItem],
        title: str,
        description: str | None = None,
        previous_total: float | None = None,
    ) -> BudgetApproval:
        principal = require_permission(
            self._user_session,
            "budget.approval.submit",
            operation_label="submit budget for approval",
        )
        clean_title = (title or "").strip()
        if not clean_title:
            raise ValidationError("Approval title is required.", code="APPROVAL_TITLE_REQUIRED")

        approval = BudgetApproval.submit(
            project_id=project_id,
            title=clean_title,
            categories=categories,
            items=items,
            submitted_by=principal.user_id,
            submitted_by_name=principal.actor_name,
            description=description,
            previous_total=None if previous_total is None else float(previous_total),
        )
        try:
            self._approval_repo.add(approval)
            record_audit(self, AuditAction.APPROVAL_SUBMIT, approval)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "Budget approval %s submitted for project %s (%s)",
            approval.id,
            project_id,
            approval.changes_summary,
        )
        self._emit(project_id)
        return approval

    def submit_current_for_approval(
        self,
        project_id: str,
        title: str,
        description: str | None = None,
        previous_total: float | None = None,
    ) -> BudgetApproval:
        if self._budget_lines is None:
            raise RuntimeError("BudgetApprovalService was built without a budget line repository.")
        return self.submit_for_approval(
            project_id,
            self._budget_lines.list_categories(project_id),
            self._budget_lines.list_items(project_id),
            title,
            description=description,
            previous_total=previous_total,
        )

    # ---------------- reads ----------------

    def get_approval(self, approval_id: str) -> BudgetApproval:
        approval = self._approval_repo.get(approval_id)
        if approval is None:
            raise NotFoundError("Budget approval not found.", code="APPROVAL_NOT_FOUND")
        return approval

    def list_approvals(
        self,
        project_id: str,
        *,
        status: ApprovalStatus | str | None = None,
        limit: int = 200,
    ) -> list[BudgetApproval]:
        return self._approval_repo.list_for_project(
            project_id,
            status=as_approval_status(status),
            limit=limit,
        )

    def pending_count(self, project_id: str) -> int:
        return self._approval_repo.count_for_project(project_id, status=ApprovalStatus.PENDING)

    # ---------------- transitions ----------------

    def approve(
        self,
        approval_id: str,
        comment: str | None = None,
        *,
        expected_status: ApprovalStatus | str = ApprovalStatus.PENDING,
    ) -> BudgetApproval:
        message = (comment or "").strip() or None
        return self._transition(
            approval_id,
            ApprovalStatus.APPROVED,
            message=message,
            expected_status=expected_status,
            operation_label="approve budget",
        )

    def reject(
        self,
        approval_id: str,
        reason: str,
        *,
        expected_status: ApprovalStatus | str = ApprovalStatus.PENDING,
    ) -> BudgetApproval:
        clean_reason = (reason or "").strip()
        if not clean_reason:
            raise ValidationError("A rejection reason is required.", code="REJECTION_REASON_REQUIRED")
        return self._transition(
            approval_id,
            ApprovalStatus.REJECTED,
            message=f"Rejected: {clean_reason}",
            expected_status=expected_status,
            operation_label="reject budget",
        )

    def request_revision(
        self,
        approval_id: str,
        feedback: str,
        *,
        expected_status: ApprovalStatus | str = ApprovalStatus.PENDING,
    ) -> BudgetApproval:
        clean_feedback = (feedback or "").strip()
        if not clean_feedback:
            raise ValidationError("Revision feedback is required.", code="REVISION_FEEDBACK_REQUIRED")
        return self._transition(
            approval_id,
            ApprovalStatus.REVISION_REQUESTED,
            message=f"Revision requested: {clean_feedback}",
            expected_status=expected_status,
            operation_label="request budget revision",
        )

    def _transition(
        self,
        approval_id: str,
        target: ApprovalStatus,
        *,
        message: str | None,
        expected_status: ApprovalStatus | str,
        operation_label: str,
    ) -> BudgetApproval:
        principal = require_authenticated(self._user_session, operation_label=operation_label)
        expected = as_approval_status(expected_status) or ApprovalStatus.PENDING
        approval = self.get_approval(approval_id)

        if not self._reviewer_predicate(principal, approval):
            raise BusinessRuleError(
                f"Permission denied for {operation_label}.",
                code="PERMISSION_DENIED",
            )
        if approval.status.is_terminal:
            raise ConflictError(
                f"Budget approval is already {approval.status.value}.",
                code="APPROVAL_ALREADY_DECIDED",
            )
        if approval.status != expected or target not in ALLOWED_TRANSITIONS[approval.status]:
            raise ConflictError(
                f"Budget approval is {approval.status.value}, not {expected.value}.",
                code="APPROVAL_ALREADY_DECIDED",
            )

        loaded_version = approval.version
        approval.status = target
        approval.reviewed_by = principal.user_id
        approval.reviewed_by_name = principal.actor_name
        approval.reviewed_at = datetime.now(timezone.utc)
        comment = (
            ApprovalComment.create(principal.user_id, principal.actor_name, message)
            if message
            else None
        )
        try:
            approval.version = self._approval_repo.update_review(
                approval,
                expected_version=loaded_version,
                expected_status=expected,
            )
            if comment is not None:
                self._approval_repo.append_comment(approval.id, comment)
            record_audit(
                self,
                AuditAction.for_decision(target),
                approval,
                from_status=expected.value,
                to_status=target.value,
            )
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        if comment is not None:
            approval.comments.append(comment)
        logger.info(
            "Budget approval %s moved %s -> %s by %s",
            approval.id,
            expected.value,
            target.value,
            principal.username,
        )
        self._emit(approval.project_id)
        return approval

    # ---------------- comments ----------------

    def add_comment(self, approval_id: str, message: str) -> ApprovalComment:
        principal = require_permission(
            self._user_session,
            "budget.approval.comment",
            operation_label="comment on budget approval",
        )
        clean_message = (message or "").strip()
        if not clean_message:
            raise ValidationError("Comment message is required.", code="COMMENT_MESSAGE_REQUIRED")
        approval = self.get_approval(approval_id)

        comment = ApprovalComment.create(principal.user_id, principal.actor_name, clean_message)
        try:
            self._approval_repo.append_comment(approval.id, comment)
            record_audit(self, AuditAction.APPROVAL_COMMENT, approval, comment_id=comment.id)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        self._emit(approval.project_id)
        return comment

    # ---------------- deletion ----------------

    def delete_approval(self, approval_id: str) -> None:
        """Remove an approval and its comment thread. Approved records are kept."""
        require_permission(
            self._user_session,
            "budget.approval.delete",
            operation_label="delete budget approval",
        )
        approval = self._approval_repo.get(approval_id)
        if approval is None:
            return
        if approval.status == ApprovalStatus.APPROVED:
            raise BusinessRuleError(
                "Approved budgets cannot be deleted.",
                code="APPROVAL_DELETE_FORBIDDEN",
            )
        try:
            if not self._approval_repo.delete(approval_id):
                if self._approval_repo.exists(approval_id):
                    # approved after we read it
                    raise BusinessRuleError(
                        "Approved budgets cannot be deleted.",
                        code="APPROVAL_DELETE_FORBIDDEN",
                    )
                self._session.rollback()
                return
            record_audit(self, AuditAction.APPROVAL_DELETE, approval)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        self._emit(approval.project_id)

    def _emit(self, project_id: str) -> None:
        if self._events is not None:
            self._events.approvals_changed.emit(project_id)


__all__ = ["BudgetApprovalService", "as_approval_status"]
