from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from shootbudget.core.domain import BudgetCategory, BudgetItem
from shootbudget.core.interfaces import BudgetLineRepository
from shootbudget.infra.db.budget.mapper import (
    category_from_orm,
    category_to_orm,
    item_from_orm,
    item_to_orm,
)
from shootbudget.infra.db.models import BudgetCategoryORM, BudgetItemORM
from shootbudget.infra.db.optimistic import update_with_version_check


class SqlAlchemyBudgetLineRepository(BudgetLineRepository):
    def __init__(self, session: Session):
        self.session = session

    # ---------------- categories ----------------

    def add_category(self, category: BudgetCategory) -> None:
        self.session.add(category_to_orm(category))

    def update_category(self, category: BudgetCategory) -> int:
        return update_with_version_check(
            self.session,
            BudgetCategoryORM,
            category.id,
            getattr(category, "version", 1),
            {
                "name": category.name,
                "sort_order": category.order,
                "department": category.department,
                "phase": getattr(category.phase, "value", category.phase),
            },
            not_found_message="Budget category not found.",
            stale_message="Budget category was updated by another user.",
        )

    def get_category(self, category_id: str) -> Optional[BudgetCategory]:
        obj = self.session.get(BudgetCategoryORM, category_id)
        return category_from_orm(obj) if obj else None

    def list_categories(self, project_id: str) -> List[BudgetCategory]:
        stmt = (
            select(BudgetCategoryORM)
            .where(BudgetCategoryORM.project_id == project_id)
            .order_by(BudgetCategoryORM.sort_order, BudgetCategoryORM.name)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [category_from_orm(row) for row in rows]

    def delete_category(self, category_id: str) -> None:
        obj = self.session.get(BudgetCategoryORM, category_id)
        if obj:
            self.session.delete(obj)

    # ---------------- items ----------------

    def add_item(self, item: BudgetItem) -> None:
        self.session.add(item_to_orm(item))

    def update_item(self, item: BudgetItem) -> int:
        values = {
            column: getattr(item_to_orm(item), column)
            for column in (
                "category_id",
                "description",
                "estimated_amount",
                "actual_amount",
                "status",
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
        }
        return update_with_version_check(
            self.session,
            BudgetItemORM,
            item.id,
            getattr(item, "version", 1),
            values,
            not_found_message="Budget item not found.",
            stale_message="Budget item was updated by another user.",
        )

    def get_item(self, item_id: str) -> Optional[BudgetItem]:
        obj = self.session.get(BudgetItemORM, item_id)
        return item_from_orm(obj) if obj else None

    def list_items(self, project_id: str) -> List[BudgetItem]:
        stmt = (
            select(BudgetItemORM)
            .join(BudgetCategoryORM, BudgetCategoryORM.id == BudgetItemORM.category_id)
            .where(BudgetItemORM.project_id == project_id)
            .order_by(BudgetCategoryORM.sort_order, BudgetItemORM.description)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [item_from_orm(row) for row in rows]

    def list_items_for_category(self, category_id: str) -> List[BudgetItem]:
        stmt = (
            select(BudgetItemORM)
            .where(BudgetItemORM.category_id == category_id)
            .order_by(BudgetItemORM.description)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [item_from_orm(row) for row in rows]

    def delete_item(self, item_id: str) -> None:
        self.session.execute(delete(BudgetItemORM).where(BudgetItemORM.id == item_id))


__all__ = ["SqlAlchemyBudgetLineRepository"]
