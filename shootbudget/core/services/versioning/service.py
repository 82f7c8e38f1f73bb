from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from shootbudget.core.domain import AuditAction, BudgetCategory, BudgetItem, BudgetVersion, clean_id
from shootbudget.core.events import BudgetEvents
from shootbudget.core.exceptions import NotFoundError, ValidationError
from shootbudget.core.interfaces import BudgetLineRepository, BudgetVersionRepository
from shootbudget.core.services.audit.helpers import record_audit
from shootbudget.core.services.auth.authorization import require_permission
from shootbudget.core.services.auth.session import UserSessionContext
from shootbudget.core.services.versioning.diff import compare_versions
from shootbudget.core.services.versioning.models import VersionDiff
from shootbudget.core.services.versioning.policy import version_history_limit

logger = logging.getLogger(__name__)


class BudgetVersionService:
    def __init__(
        self,
        session: Session,
        version_repo: BudgetVersionRepository,
        budget_repo: BudgetLineRepository | None = None,
        user_session: UserSessionContext | None = None,
        audit_service=None,
        events: BudgetEvents | None = None,
    ):
        self._session: Session = session
        self._versions: BudgetVersionRepository = version_repo
        self._budget_lines: BudgetLineRepository | None = budget_repo
        self._user_session = user_session
        self._audit_service = audit_service
        self._events = events

    def capture_version(
        self,
        project_id: str,
        name: str,
        categories: Iterable[BudgetCategory],
        items: Iterable[BudgetItem],
        description: str | None = None,
    ) -> BudgetVersion:
        principal = require_permission(
            self._user_session,
            "budget.version.manage",
            operation_label="save budget version",
        )
        clean_name = (name or "").strip()
        if not clean_name:
            raise ValidationError("Version name is required.", code="VERSION_NAME_REQUIRED")

        version = BudgetVersion.capture(
            project_id=project_id,
            name=clean_name,
            categories=categories,
            items=items,
            created_by=principal.user_id,
            created_by_name=principal.actor_name,
            description=description,
        )
        try:
            self._versions.add(version)
            record_audit(self, AuditAction.VERSION_CREATE, version)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "Captured budget version %s (%s) for project %s: %d items, estimated=%.2f",
            version.id,
            version.name,
            project_id,
            version.item_count,
            version.total_estimated,
        )
        self._emit(project_id)
        return version

    def capture_current_version(
        self,
        project_id: str,
        name: str,
        description: str | None = None,
    ) -> BudgetVersion:
        if self._budget_lines is None:
            raise RuntimeError("BudgetVersionService was built without a budget line repository.")
        categories = self._budget_lines.list_categories(project_id)
        items = self._budget_lines.list_items(project_id)
        return self.capture_version(project_id, name, categories, items, description=description)

    def get_version(self, version_id: str) -> BudgetVersion:
        key = clean_id(version_id)
        version = self._versions.get(key) if key else None
        if version is None:
            raise NotFoundError("Budget version not found.", code="VERSION_NOT_FOUND")
        return version

    def list_versions(self, project_id: str, limit: Optional[int] = None) -> List[BudgetVersion]:
        """Newest first. ``limit`` defaults to the configured history limit and must be positive."""
        if limit is None:
            cap = version_history_limit()
        else:
            cap = int(limit)
            if cap < 1:
                raise ValidationError(
                    "Version list limit must be at least 1.",
                    code="VERSION_LIMIT_INVALID",
                )
        return self._versions.list_for_project(project_id, limit=cap)

    def delete_version(self, version_id: str) -> None:
        """Hard delete. Deleting an id that is already gone succeeds silently."""
        require_permission(
            self._user_session,
            "budget.version.manage",
            operation_label="delete budget version",
        )
        existing = self._versions.get(version_id)
        if existing is None:
            logger.debug("Budget version %s already absent; nothing to delete", version_id)
            return
        try:
            self._versions.delete(version_id)
            record_audit(self, AuditAction.VERSION_DELETE, existing)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        self._emit(existing.project_id)

    def compare(self, version_a_id: str, version_b_id: str) -> VersionDiff:
        version_a_id, version_b_id = clean_id(version_a_id), clean_id(version_b_id)
        if not version_a_id or not version_b_id:
            raise ValidationError("Two version IDs are required.", code="VERSION_COMPARE_INPUT_INVALID")

        version_a = self._versions.get(version_a_id)
        if version_a is None:
            raise NotFoundError("Version A not found.", code="VERSION_A_NOT_FOUND")
        version_b = self._versions.get(version_b_id)
        if version_b is None:
            raise NotFoundError("Version B not found.", code="VERSION_B_NOT_FOUND")

        if version_a.project_id != version_b.project_id:
            raise ValidationError(
                "Selected versions do not belong to the same project.",
                code="VERSION_COMPARE_PROJECT_MISMATCH",
            )
        return compare_versions(version_a, version_b)

    def _emit(self, project_id: str) -> None:
        if self._events is not None:
            self._events.versions_changed.emit(project_id)


__all__ = ["BudgetVersionService"]
