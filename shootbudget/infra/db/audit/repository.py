from __future__ import annotations

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from shootbudget.core.domain import AuditLogEntry
from shootbudget.core.interfaces import AuditLogRepository
from shootbudget.infra.db.audit.mapper import audit_from_orm, audit_to_orm
from shootbudget.infra.db.models import AuditLogORM


class SqlAlchemyAuditLogRepository(AuditLogRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, entry: AuditLogEntry) -> None:
        self.session.add(audit_to_orm(entry))

    def list_for_project(
        self,
        project_id: str,
        *,
        entity_type: str | None = None,
        limit: int = 200,
    ) -> List[AuditLogEntry]:
        stmt = select(AuditLogORM).where(AuditLogORM.project_id == project_id)
        if entity_type:
            stmt = stmt.where(AuditLogORM.entity_type == entity_type)
        stmt = stmt.order_by(AuditLogORM.occurred_at.desc()).limit(max(1, int(limit)))
        return [audit_from_orm(row) for row in self.session.execute(stmt).scalars()]

    def list_for_entity(self, entity_id: str) -> List[AuditLogEntry]:
        stmt = (
            select(AuditLogORM)
            .where(AuditLogORM.entity_id == entity_id)
            .order_by(AuditLogORM.occurred_at)
        )
        return [audit_from_orm(row) for row in self.session.execute(stmt).scalars()]


__all__ = ["SqlAlchemyAuditLogRepository"]
