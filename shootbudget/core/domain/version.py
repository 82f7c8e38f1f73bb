from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Optional

from shootbudget.core.domain.budget import BudgetCategory, BudgetItem, budget_totals
from shootbudget.core.domain.identifiers import generate_id


def _enum_value(value) -> Optional[str]:
    if value is None:
        return None
    return getattr(value, "value", value)


@dataclass(frozen=True)
class CategorySnapshot:
    id: str
    project_id: str
    name: str
    order: int = 0
    department: Optional[str] = None
    phase: Optional[str] = None

    @staticmethod
    def from_category(category: BudgetCategory) -> "CategorySnapshot":
        return CategorySnapshot(
            id=category.id,
            project_id=category.project_id,
            name=category.name,
            order=int(category.order or 0),
            department=category.department,
            phase=_enum_value(category.phase),
        )


@dataclass(frozen=True)
class ItemSnapshot:
    id: str
    category_id: str
    project_id: str
    description: str
    estimated_amount: Optional[float] = 0.0
    actual_amount: Optional[float] = 0.0
    status: Optional[str] = None
    notes: Optional[str] = None
    unit: Optional[str] = None
    quantity: Optional[float] = None
    unit_rate: Optional[float] = None
    vendor: Optional[str] = None
    account_code: Optional[str] = None
    phase: Optional[str] = None
    linked_crew_member_id: Optional[str] = None
    linked_equipment_id: Optional[str] = None
    linked_location_id: Optional[str] = None
    linked_cast_member_id: Optional[str] = None
    linked_schedule_event_id: Optional[str] = None
    linked_scene_id: Optional[str] = None

    @staticmethod
    def from_item(item: BudgetItem) -> "ItemSnapshot":
        return ItemSnapshot(
            id=item.id,
            category_id=item.category_id,
            project_id=item.project_id,
            description=item.description,
            estimated_amount=item.estimated_amount,
            actual_amount=item.actual_amount,
            status=_enum_value(item.status),
            notes=item.notes,
            unit=item.unit,
            quantity=item.quantity,
            unit_rate=item.unit_rate,
            vendor=item.vendor,
            account_code=item.account_code,
            phase=_enum_value(item.phase),
            linked_crew_member_id=item.linked_crew_member_id,
            linked_equipment_id=item.linked_equipment_id,
            linked_location_id=item.linked_location_id,
            linked_cast_member_id=item.linked_cast_member_id,
            linked_schedule_event_id=item.linked_schedule_event_id,
            linked_scene_id=item.linked_scene_id,
        )


@dataclass(frozen=True)
class BudgetVersion:
    """
    Named point-in-time copy of a project's budget.

    The snapshot tuples hold frozen copies, so neither later edits to the live
    categories/items nor callers holding this object can alter it.
    """

    id: str
    project_id: str
    name: str
    created_at: datetime
    created_by: str
    created_by_name: str
    total_estimated: float
    total_actual: float
    category_count: int
    item_count: int
    categories_snapshot: tuple[CategorySnapshot, ...] = field(default_factory=tuple)
    items_snapshot: tuple[ItemSnapshot, ...] = field(default_factory=tuple)
    description: str = ""

    @staticmethod
    def capture(
        project_id: str,
        name: str,
        categories: Iterable[BudgetCategory],
        items: Iterable[BudgetItem],
        *,
        created_by: str,
        created_by_name: str,
        description: str | None = None,
    ) -> "BudgetVersion":
        category_rows = tuple(CategorySnapshot.from_category(c) for c in categories)
        item_rows = tuple(ItemSnapshot.from_item(i) for i in items)
        total_estimated, total_actual = budget_totals(item_rows)
        return BudgetVersion(
            id=generate_id(),
            project_id=project_id,
            name=name,
            description=(description or "").strip(),
            created_at=datetime.now(timezone.utc),
            created_by=created_by,
            created_by_name=created_by_name,
            total_estimated=total_estimated,
            total_actual=total_actual,
            category_count=len(category_rows),
            item_count=len(item_rows),
            categories_snapshot=category_rows,
            items_snapshot=item_rows,
        )


__all__ = ["CategorySnapshot", "ItemSnapshot", "BudgetVersion"]
