from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from shootbudget.core.domain import BudgetVersion
from shootbudget.core.interfaces import BudgetVersionRepository
from shootbudget.infra.db.models import BudgetVersionORM
from shootbudget.infra.db.version.mapper import version_from_orm, version_to_orm


class SqlAlchemyBudgetVersionRepository(BudgetVersionRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, version: BudgetVersion) -> None:
        self.session.add(version_to_orm(version))

    def get(self, version_id: str) -> Optional[BudgetVersion]:
        obj = self.session.get(BudgetVersionORM, version_id)
        return version_from_orm(obj) if obj else None

    def list_for_project(self, project_id: str, *, limit: int = 50) -> List[BudgetVersion]:
        stmt = (
            select(BudgetVersionORM)
            .where(BudgetVersionORM.project_id == project_id)
            .order_by(BudgetVersionORM.created_at.desc())
            .limit(max(1, int(limit)))
        )
        rows = self.session.execute(stmt).scalars().all()
        return [version_from_orm(row) for row in rows]

    def delete(self, version_id: str) -> bool:
        result = self.session.execute(delete(BudgetVersionORM).where(BudgetVersionORM.id == version_id))
        return result.rowcount > 0


__all__ = ["SqlAlchemyBudgetVersionRepository"]
