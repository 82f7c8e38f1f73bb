from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from shootbudget.core.domain.enums import BudgetItemStatus, BudgetPhase
from shootbudget.core.domain.identifiers import generate_id


@dataclass
class BudgetCategory:
    id: str
    project_id: str
    name: str
    order: int = 0
    department: Optional[str] = None
    phase: Optional[BudgetPhase] = None
    version: int = 1

    @staticmethod
    def create(
        project_id: str,
        name: str,
        order: int = 0,
        department: Optional[str] = None,
        phase: Optional[BudgetPhase] = None,
    ) -> "BudgetCategory":
        return BudgetCategory(
            id=generate_id(),
            project_id=project_id,
            name=name,
            order=order,
            department=department,
            phase=phase,
        )


@dataclass
class BudgetItem:
    id: str
    category_id: str
    project_id: str
    description: str
    estimated_amount: float = 0.0
    actual_amount: float = 0.0
    status: str = BudgetItemStatus.ESTIMATED.value
    notes: Optional[str] = None

    unit: Optional[str] = None  # "days", "hours", "units"
    quantity: Optional[float] = None
    unit_rate: Optional[float] = None
    vendor: Optional[str] = None
    account_code: Optional[str] = None
    phase: Optional[BudgetPhase] = None

    linked_crew_member_id: Optional[str] = None
    linked_equipment_id: Optional[str] = None
    linked_location_id: Optional[str] = None
    linked_cast_member_id: Optional[str] = None
    linked_schedule_event_id: Optional[str] = None
    linked_scene_id: Optional[str] = None

    version: int = 1

    @staticmethod
    def create(
        project_id: str,
        category_id: str,
        description: str,
        estimated_amount: float = 0.0,
        actual_amount: float = 0.0,
        **extra,
    ) -> "BudgetItem":
        return BudgetItem(
            id=generate_id(),
            category_id=category_id,
            project_id=project_id,
            description=description,
            estimated_amount=estimated_amount,
            actual_amount=actual_amount,
            **extra,
        )


def budget_totals(items: Iterable[object]) -> tuple[float, float]:
    """
    Sum estimated and actual amounts over live items or snapshot items.
    Missing amounts count as zero.
    """
    total_estimated = 0.0
    total_actual = 0.0
    for item in items:
        total_estimated += float(getattr(item, "estimated_amount", None) or 0.0)
        total_actual += float(getattr(item, "actual_amount", None) or 0.0)
    return total_estimated, total_actual


__all__ = ["BudgetCategory", "BudgetItem", "budget_totals"]
