from __future__ import annotations

from typing import Any, List

from sqlalchemy.orm import Session

from shootbudget.core.domain import AuditAction, AuditLogEntry
from shootbudget.core.interfaces import AuditLogRepository
from shootbudget.core.services.audit.details import subject_details
from shootbudget.core.services.auth.session import UserSessionContext


class AuditService:
    """Budget audit trail. Entries are staged in the caller's transaction and never committed here."""

    def __init__(
        self,
        session: Session,
        audit_repo: AuditLogRepository,
        user_session: UserSessionContext | None = None,
    ):
        self._session = session
        self._audit_repo = audit_repo
        self._user_session = user_session

    def record(
        self,
        action: AuditAction,
        subject: Any,
        *,
        details: dict[str, Any] | None = None,
    ) -> AuditLogEntry:
        principal = self._user_session.principal if self._user_session else None
        entry = AuditLogEntry.record(
            action,
            subject,
            actor_user_id=principal.user_id if principal else None,
            actor_name=principal.actor_name if principal else None,
            details={**subject_details(subject), **(details or {})},
        )
        self._audit_repo.add(entry)
        return entry

    def project_history(
        self,
        project_id: str,
        *,
        entity_type: str | None = None,
        limit: int = 200,
    ) -> List[AuditLogEntry]:
        """Newest first."""
        return self._audit_repo.list_for_project(project_id, entity_type=entity_type, limit=limit)

    def entity_history(self, entity_id: str) -> List[AuditLogEntry]:
        """Oldest first: the life of one version, approval, category or item."""
        return self._audit_repo.list_for_entity(entity_id)


__all__ = ["AuditService"]
