from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from shootbudget.core.domain.approval import ApprovalStatus
from shootbudget.core.domain.identifiers import generate_id


class AuditAction(str, Enum):
    """Everything the budget services write to the audit trail, as ``budget.<subject>.<verb>``."""

    CATEGORY_ADD = "budget.category.add"
    CATEGORY_UPDATE = "budget.category.update"
    CATEGORY_DELETE = "budget.category.delete"
    ITEM_ADD = "budget.item.add"
    ITEM_UPDATE = "budget.item.update"
    ITEM_DELETE = "budget.item.delete"
    VERSION_CREATE = "budget.version.create"
    VERSION_DELETE = "budget.version.delete"
    APPROVAL_SUBMIT = "budget.approval.submit"
    APPROVAL_APPROVED = "budget.approval.approved"
    APPROVAL_REJECTED = "budget.approval.rejected"
    APPROVAL_REVISION_REQUESTED = "budget.approval.revision_requested"
    APPROVAL_COMMENT = "budget.approval.comment"
    APPROVAL_DELETE = "budget.approval.delete"

    @property
    def entity_type(self) -> str:
        scope, subject, _verb = self.value.split(".", 2)
        return f"{scope}_{subject}"

    @staticmethod
    def for_decision(status: ApprovalStatus) -> "AuditAction":
        return AuditAction(f"budget.approval.{status.value}")


@dataclass(frozen=True)
class AuditLogEntry:
    id: str
    occurred_at: datetime
    project_id: str
    action: AuditAction
    entity_id: str
    actor_user_id: str | None = None
    actor_name: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def entity_type(self) -> str:
        return self.action.entity_type

    @staticmethod
    def record(
        action: AuditAction,
        subject: Any,
        *,
        actor_user_id: str | None = None,
        actor_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> "AuditLogEntry":
        """``subject`` is the category, item, version or approval the action touched."""
        action = AuditAction(action)
        return AuditLogEntry(
            id=generate_id(),
            occurred_at=datetime.now(timezone.utc),
            project_id=subject.project_id,
            action=action,
            entity_id=subject.id,
            actor_user_id=actor_user_id,
            actor_name=actor_name,
            details=dict(details or {}),
        )


__all__ = ["AuditAction", "AuditLogEntry"]
