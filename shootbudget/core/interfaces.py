# core/interfaces.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from shootbudget.core.domain import (
    ApprovalComment,
    ApprovalStatus,
    AuditLogEntry,
    BudgetApproval,
    BudgetCategory,
    BudgetItem,
    BudgetVersion,
)


class BudgetLineRepository(ABC):
    @abstractmethod
    def add_category(self, category: BudgetCategory) -> None: ...

    @abstractmethod
    def update_category(self, category: BudgetCategory) -> int: ...

    @abstractmethod
    def get_category(self, category_id: str) -> Optional[BudgetCategory]: ...

    @abstractmethod
    def list_categories(self, project_id: str) -> List[BudgetCategory]: ...

    @abstractmethod
    def delete_category(self, category_id: str) -> None: ...

    @abstractmethod
    def add_item(self, item: BudgetItem) -> None: ...

    @abstractmethod
    def update_item(self, item: BudgetItem) -> int: ...

    @abstractmethod
    def get_item(self, item_id: str) -> Optional[BudgetItem]: ...

    @abstractmethod
    def list_items(self, project_id: str) -> List[BudgetItem]: ...

    @abstractmethod
    def list_items_for_category(self, category_id: str) -> List[BudgetItem]: ...

    @abstractmethod
    def delete_item(self, item_id: str) -> None: ...


class BudgetVersionRepository(ABC):
    """Versions are insert/read/delete only."""

    @abstractmethod
    def add(self, version: BudgetVersion) -> None: ...

    @abstractmethod
    def get(self, version_id: str) -> Optional[BudgetVersion]: ...

    @abstractmethod
    def list_for_project(self, project_id: str, *, limit: int = 50) -> List[BudgetVersion]: ...

    @abstractmethod
    def delete(self, version_id: str) -> bool: ...


class BudgetApprovalRepository(ABC):
    @abstractmethod
    def add(self, approval: BudgetApproval) -> None: ...

    @abstractmethod
    def get(self, approval_id: str) -> Optional[BudgetApproval]: ...

    @abstractmethod
    def list_for_project(
        self,
        project_id: str,
        *,
        status: ApprovalStatus | None = None,
        limit: int = 200,
    ) -> List[BudgetApproval]: ...

    @abstractmethod
    def count_for_project(self, project_id: str, *, status: ApprovalStatus | None = None) -> int: ...

    @abstractmethod
    def update_review(
        self,
        approval: BudgetApproval,
        *,
        expected_version: int,
        expected_status: ApprovalStatus,
    ) -> int: ...

    @abstractmethod
    def append_comment(self, approval_id: str, comment: ApprovalComment) -> None: ...

    @abstractmethod
    def delete(self, approval_id: str) -> bool:
        """Delete the approval and its comments unless it is approved. False when nothing was removed."""

    @abstractmethod
    def exists(self, approval_id: str) -> bool: ...


class AuditLogRepository(ABC):
    """Append-only; every entry belongs to a project."""

    @abstractmethod
    def add(self, entry: AuditLogEntry) -> None: ...

    @abstractmethod
    def list_for_project(
        self,
        project_id: str,
        *,
        entity_type: str | None = None,
        limit: int = 200,
    ) -> List[AuditLogEntry]: ...

    @abstractmethod
    def list_for_entity(self, entity_id: str) -> List[AuditLogEntry]: ...


__all__ = [
    "BudgetLineRepository",
    "BudgetVersionRepository",
    "BudgetApprovalRepository",
    "AuditLogRepository",
]
