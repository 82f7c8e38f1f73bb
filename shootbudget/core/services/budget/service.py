from __future__ import annotations

import logging
from typing import Any, List

from sqlalchemy.orm import Session

from shootbudget.core.domain import (
    AuditAction,
    BudgetCategory,
    BudgetItem,
    BudgetItemStatus,
    BudgetPhase,
)
from shootbudget.core.events import BudgetEvents
from shootbudget.core.exceptions import ConcurrencyError, NotFoundError, ValidationError
from shootbudget.core.interfaces import BudgetLineRepository
from shootbudget.core.services.audit.helpers import record_audit
from shootbudget.core.services.auth.authorization import require_permission
from shootbudget.core.services.auth.session import UserSessionContext

logger = logging.getLogger(__name__)

_ITEM_OPTIONAL_FIELDS = (
    "notes",
    "unit",
    "quantity",
    "unit_rate",
    "vendor",
    "account_code",
    "phase",
    "linked_crew_member_id",
    "linked_equipment_id",
    "linked_location_id",
    "linked_cast_member_id",
    "linked_schedule_event_id",
    "linked_scene_id",
)


def as_item_status(value: Any) -> str:
    if isinstance(value, BudgetItemStatus):
        return value.value
    raw = str(value or BudgetItemStatus.ESTIMATED.value).strip().lower()
    try:
        return BudgetItemStatus(raw).value
    except ValueError:
        raise ValidationError(f"Unknown budget item status '{value}'.", code="ITEM_STATUS_INVALID")


def as_phase(value: Any) -> BudgetPhase | None:
    if value in (None, ""):
        return None
    if isinstance(value, BudgetPhase):
        return value
    try:
        return BudgetPhase(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown budget phase '{value}'.", code="PHASE_INVALID")


def _non_negative(value: Any, label: str) -> float:
    amount = float(value or 0.0)
    if amount < 0:
        raise ValidationError(f"{label} cannot be negative.", code="AMOUNT_NEGATIVE")
    return amount


class BudgetLineService:
    """
    Working set of categories and line items that users edit directly.
    Versions and approvals only ever read from it.
    """

    def __init__(
        self,
        session: Session,
        budget_repo: BudgetLineRepository,
        user_session: UserSessionContext | None = None,
        audit_service=None,
        events: BudgetEvents | None = None,
    ):
        self._session: Session = session
        self._budget_repo: BudgetLineRepository = budget_repo
        self._user_session = user_session
        self._audit_service = audit_service
        self._events = events

    # ---------------- reads ----------------

    def list_categories(self, project_id: str) -> List[BudgetCategory]:
        return self._budget_repo.list_categories(project_id)

    def list_items(self, project_id: str) -> List[BudgetItem]:
        return self._budget_repo.list_items(project_id)

    def get_budget(self, project_id: str) -> tuple[List[BudgetCategory], List[BudgetItem]]:
        return self.list_categories(project_id), self.list_items(project_id)

    # ---------------- categories ----------------

    def add_category(
        self,
        project_id: str,
        name: str,
        department: str | None = None,
        phase: BudgetPhase | str | None = None,
    ) -> BudgetCategory:
        require_permission(self._user_session, "budget.manage", operation_label="add budget category")
        if not (name or "").strip():
            raise ValidationError("Category name is required.", code="CATEGORY_NAME_REQUIRED")
        order = len(self._budget_repo.list_categories(project_id))
        category = BudgetCategory.create(
            project_id=project_id,
            name=name.strip(),
            order=order,
            department=(department or "").strip() or None,
            phase=as_phase(phase),
        )
        try:
            self._budget_repo.add_category(category)
            record_audit(self, AuditAction.CATEGORY_ADD, category)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        self._emit(project_id)
        return category

    def update_category(
        self,
        category_id: str,
        name: str | None = None,
        department: str | None = None,
        phase: BudgetPhase | str | None = None,
        order: int | None = None,
        expected_version: int | None = None,
    ) -> BudgetCategory:
        require_permission(self._user_session, "budget.manage", operation_label="update budget category")
        category = self._budget_repo.get_category(category_id)
        if category is None:
            raise NotFoundError("Budget category not found.", code="CATEGORY_NOT_FOUND")
        if expected_version is not None and category.version != expected_version:
            raise ConcurrencyError(
                "Category changed since you opened it. Refresh and try again.",
                code="STALE_WRITE",
            )
        if name is not None:
            if not name.strip():
                raise ValidationError("Category name is required.", code="CATEGORY_NAME_REQUIRED")
            category.name = name.strip()
        if department is not None:
            category.department = department.strip() or None
        if phase is not None:
            category.phase = as_phase(phase)
        if order is not None:
            category.order = int(order)

        try:
            category.version = self._budget_repo.update_category(category)
            record_audit(self, AuditAction.CATEGORY_UPDATE, category)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        self._emit(category.project_id)
        return category

    def delete_category(self, category_id: str) -> None:
        """Delete a category and its line items. Missing ids are a no-op."""
        require_permission(self._user_session, "budget.manage", operation_label="delete budget category")
        category = self._budget_repo.get_category(category_id)
        if category is None:
            return
        items = self._budget_repo.list_items_for_category(category_id)
        try:
            for item in items:
                self._budget_repo.delete_item(item.id)
            self._budget_repo.delete_category(category_id)
            record_audit(self, AuditAction.CATEGORY_DELETE, category, deleted_items=len(items))
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info("Deleted budget category %s with %d line items", category_id, len(items))
        self._emit(category.project_id)

    # ---------------- items ----------------

    def add_item(
        self,
        project_id: str,
        category_id: str,
        description: str,
        estimated_amount: float = 0.0,
        actual_amount: float = 0.0,
        status: BudgetItemStatus | str = BudgetItemStatus.ESTIMATED,
        **extra: Any,
    ) -> BudgetItem:
        require_permission(self._user_session, "budget.manage", operation_label="add budget item")
        category = self._budget_repo.get_category(category_id)
        if category is None:
            raise NotFoundError("Budget category not found.", code="CATEGORY_NOT_FOUND")
        if category.project_id != project_id:
            raise ValidationError(
                "Category must belong to the selected project.",
                code="CATEGORY_PROJECT_MISMATCH",
            )
        if not (description or "").strip():
            raise ValidationError("Description is required.", code="ITEM_DESCRIPTION_REQUIRED")
        unknown = set(extra) - set(_ITEM_OPTIONAL_FIELDS)
        if unknown:
            raise ValidationError(
                f"Unknown budget item fields: {', '.join(sorted(unknown))}.",
                code="ITEM_FIELD_UNKNOWN",
            )
        if "phase" in extra:
            extra["phase"] = as_phase(extra["phase"])

        item = BudgetItem.create(
            project_id=project_id,
            category_id=category_id,
            description=description.strip(),
            estimated_amount=_non_negative(estimated_amount, "Estimated amount"),
            actual_amount=_non_negative(actual_amount, "Actual amount"),
            status=as_item_status(status),
            **extra,
        )
        try:
            self._budget_repo.add_item(item)
            record_audit(self, AuditAction.ITEM_ADD, item)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        self._emit(project_id)
        return item

    def update_item(
        self,
        item_id: str,
        *,
        expected_version: int | None = None,
        **changes: Any,
    ) -> BudgetItem:
        require_permission(self._user_session, "budget.manage", operation_label="update budget item")
        item = self._budget_repo.get_item(item_id)
        if item is None:
            raise NotFoundError("Budget item not found.", code="ITEM_NOT_FOUND")
        if expected_version is not None and item.version != expected_version:
            raise ConcurrencyError(
                "Budget item changed since you opened it. Refresh and try again.",
                code="STALE_WRITE",
            )

        allowed = set(_ITEM_OPTIONAL_FIELDS) | {
            "description",
            "estimated_amount",
            "actual_amount",
            "status",
            "category_id",
        }
        unknown = set(changes) - allowed
        if unknown:
            raise ValidationError(
                f"Unknown budget item fields: {', '.join(sorted(unknown))}.",
                code="ITEM_FIELD_UNKNOWN",
            )

        if "description" in changes:
            description = (changes.pop("description") or "").strip()
            if not description:
                raise ValidationError("Description is required.", code="ITEM_DESCRIPTION_REQUIRED")
            item.description = description
        if "estimated_amount" in changes:
            item.estimated_amount = _non_negative(changes.pop("estimated_amount"), "Estimated amount")
        if "actual_amount" in changes:
            item.actual_amount = _non_negative(changes.pop("actual_amount"), "Actual amount")
        if "status" in changes:
            item.status = as_item_status(changes.pop("status"))
        if "phase" in changes:
            item.phase = as_phase(changes.pop("phase"))
        if "category_id" in changes:
            category = self._budget_repo.get_category(changes.pop("category_id"))
            if category is None or category.project_id != item.project_id:
                raise ValidationError(
                    "Category must belong to the item's project.",
                    code="CATEGORY_PROJECT_MISMATCH",
                )
            item.category_id = category.id
        for field_name, value in changes.items():
            setattr(item, field_name, value)

        try:
            item.version = self._budget_repo.update_item(item)
            record_audit(self, AuditAction.ITEM_UPDATE, item)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        self._emit(item.project_id)
        return item

    def delete_item(self, item_id: str) -> None:
        """Missing ids are a no-op."""
        require_permission(self._user_session, "budget.manage", operation_label="delete budget item")
        item = self._budget_repo.get_item(item_id)
        if item is None:
            return
        try:
            self._budget_repo.delete_item(item_id)
            record_audit(self, AuditAction.ITEM_DELETE, item)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        self._emit(item.project_id)

    def _emit(self, project_id: str) -> None:
        if self._events is not None:
            self._events.budget_lines_changed.emit(project_id)


__all__ = ["BudgetLineService", "as_item_status", "as_phase"]
