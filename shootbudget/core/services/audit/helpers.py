from __future__ import annotations

from typing import Any

from shootbudget.core.domain import AuditAction


def record_audit(owner: object, action: AuditAction, subject: Any, **extra: Any) -> None:
    """
    Stage an audit entry for ``subject`` in the owner's open transaction.

    The owner commits (or rolls back) together with its own write, so a
    failed operation leaves no trail. ``extra`` is merged over the details
    derived from the subject.
    """
    audit_service = getattr(owner, "_audit_service", None)
    if audit_service is None:
        return
    audit_service.record(action, subject, details=extra)


__all__ = ["record_audit"]
