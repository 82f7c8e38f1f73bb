from __future__ import annotations

from shootbudget.core.domain import BudgetCategory, BudgetItem, BudgetPhase
from shootbudget.infra.db.models import BudgetCategoryORM, BudgetItemORM


def _phase_value(phase) -> str | None:
    if phase is None:
        return None
    return getattr(phase, "value", phase)


def _phase_from(raw: str | None) -> BudgetPhase | None:
    if not raw:
        return None
    try:
        return BudgetPhase(raw)
    except ValueError:
        return BudgetPhase.OTHER


def category_to_orm(category: BudgetCategory) -> BudgetCategoryORM:
    return BudgetCategoryORM(
        id=category.id,
        project_id=category.project_id,
        name=category.name,
        sort_order=category.order,
        department=category.department,
        phase=_phase_value(category.phase),
        version=getattr(category, "version", 1),
    )


def category_from_orm(obj: BudgetCategoryORM) -> BudgetCategory:
    return BudgetCategory(
        id=obj.id,
        project_id=obj.project_id,
        name=obj.name,
        order=obj.sort_order or 0,
        department=obj.department,
        phase=_phase_from(obj.phase),
        version=getattr(obj, "version", 1),
    )


def item_to_orm(item: BudgetItem) -> BudgetItemORM:
    return BudgetItemORM(
        id=item.id,
        category_id=item.category_id,
        project_id=item.project_id,
        description=item.description,
        estimated_amount=float(item.estimated_amount or 0.0),
        actual_amount=float(item.actual_amount or 0.0),
        status=item.status,
        notes=item.notes,
        unit=item.unit,
        quantity=item.quantity,
        unit_rate=item.unit_rate,
        vendor=item.vendor,
        account_code=item.account_code,
        phase=_phase_value(item.phase),
        linked_crew_member_id=item.linked_crew_member_id,
        linked_equipment_id=item.linked_equipment_id,
        linked_location_id=item.linked_location_id,
        linked_cast_member_id=item.linked_cast_member_id,
        linked_schedule_event_id=item.linked_schedule_event_id,
        linked_scene_id=item.linked_scene_id,
        version=getattr(item, "version", 1),
    )


def item_from_orm(obj: BudgetItemORM) -> BudgetItem:
    return BudgetItem(
        id=obj.id,
        category_id=obj.category_id,
        project_id=obj.project_id,
        description=obj.description,
        estimated_amount=obj.estimated_amount or 0.0,
        actual_amount=obj.actual_amount or 0.0,
        status=obj.status or "estimated",
        notes=obj.notes,
        unit=obj.unit,
        quantity=obj.quantity,
        unit_rate=obj.unit_rate,
        vendor=obj.vendor,
        account_code=obj.account_code,
        phase=_phase_from(obj.phase),
        linked_crew_member_id=obj.linked_crew_member_id,
        linked_equipment_id=obj.linked_equipment_id,
        linked_location_id=obj.linked_location_id,
        linked_cast_member_id=obj.linked_cast_member_id,
        linked_schedule_event_id=obj.linked_schedule_event_id,
        linked_scene_id=obj.linked_scene_id,
        version=getattr(obj, "version", 1),
    )


__all__ = ["category_to_orm", "category_from_orm", "item_to_orm", "item_from_orm"]
