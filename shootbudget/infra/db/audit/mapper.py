from __future__ import annotations

import json
from typing import Any

from shootbudget.core.domain import AuditAction, AuditLogEntry
from shootbudget.infra.db.models import AuditLogORM
from shootbudget.infra.db.timestamps import as_utc


def _details_json(details: dict[str, Any]) -> str:
    # amounts stay numbers; enums and datetimes fall back to str
    return json.dumps(details, default=str, ensure_ascii=False, sort_keys=True)


def _details(raw: str | None) -> dict[str, Any]:
    try:
        value = json.loads(raw or "{}")
    except json.JSONDecodeError:
        return {}
    return value if isinstance(value, dict) else {}


def audit_to_orm(entry: AuditLogEntry) -> AuditLogORM:
    return AuditLogORM(
        id=entry.id,
        occurred_at=entry.occurred_at,
        project_id=entry.project_id,
        action=entry.action.value,
        entity_type=entry.entity_type,
        entity_id=entry.entity_id,
        actor_user_id=entry.actor_user_id,
        actor_name=entry.actor_name,
        details_json=_details_json(entry.details),
    )


def audit_from_orm(obj: AuditLogORM) -> AuditLogEntry:
    return AuditLogEntry(
        id=obj.id,
        occurred_at=as_utc(obj.occurred_at),
        project_id=obj.project_id,
        action=AuditAction(obj.action),
        entity_id=obj.entity_id,
        actor_user_id=obj.actor_user_id,
        actor_name=obj.actor_name,
        details=_details(obj.details_json),
    )


__all__ = ["audit_to_orm", "audit_from_orm"]
