from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from shootbudget.core.events import BudgetEvents
from shootbudget.core.services.approval import BudgetApprovalService, ReviewerPredicate
from shootbudget.core.services.audit import AuditService
from shootbudget.core.services.auth.session import UserSessionContext
from shootbudget.core.services.budget import BudgetLineService
from shootbudget.core.services.reporting import BudgetReportingService
from shootbudget.core.services.versioning import BudgetVersionService
from shootbudget.infra.db.approval import SqlAlchemyBudgetApprovalRepository
from shootbudget.infra.db.audit import SqlAlchemyAuditLogRepository
from shootbudget.infra.db.budget import SqlAlchemyBudgetLineRepository
from shootbudget.infra.db.version import SqlAlchemyBudgetVersionRepository


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    user_session: UserSessionContext
    events: BudgetEvents
    audit_service: AuditService
    budget_line_service: BudgetLineService
    version_service: BudgetVersionService
    approval_service: BudgetApprovalService
    reporting_service: BudgetReportingService

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "user_session": self.user_session,
            "events": self.events,
            "audit_service": self.audit_service,
            "budget_line_service": self.budget_line_service,
            "version_service": self.version_service,
            "approval_service": self.approval_service,
            "reporting_service": self.reporting_service,
        }


def build_service_graph(
    session: Session,
    *,
    user_session: UserSessionContext | None = None,
    events: BudgetEvents | None = None,
    reviewer_predicate: ReviewerPredicate | None = None,
) -> ServiceGraph:
    user_session = user_session or UserSessionContext()
    events = events or BudgetEvents()

    budget_repo = SqlAlchemyBudgetLineRepository(session)
    version_repo = SqlAlchemyBudgetVersionRepository(session)
    approval_repo = SqlAlchemyBudgetApprovalRepository(session)
    audit_repo = SqlAlchemyAuditLogRepository(session)

    audit_service = AuditService(
        session=session,
        audit_repo=audit_repo,
        user_session=user_session,
    )
    budget_line_service = BudgetLineService(
        session,
        budget_repo,
        user_session=user_session,
        audit_service=audit_service,
        events=events,
    )
    version_service = BudgetVersionService(
        session,
        version_repo,
        budget_repo,
        user_session=user_session,
        audit_service=audit_service,
        events=events,
    )
    approval_service = BudgetApprovalService(
        session,
        approval_repo,
        budget_repo,
        user_session=user_session,
        audit_service=audit_service,
        events=events,
        reviewer_predicate=reviewer_predicate,
    )
    reporting_service = BudgetReportingService(
        budget_repo=budget_repo,
        version_repo=version_repo,
    )

    return ServiceGraph(
        session=session,
        user_session=user_session,
        events=events,
        audit_service=audit_service,
        budget_line_service=budget_line_service,
        version_service=version_service,
        approval_service=approval_service,
        reporting_service=reporting_service,
    )


__all__ = ["ServiceGraph", "build_service_graph"]
