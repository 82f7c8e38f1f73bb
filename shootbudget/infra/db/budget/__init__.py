from shootbudget.infra.db.budget.mapper import (
    category_from_orm,
    category_to_orm,
    item_from_orm,
    item_to_orm,
)
from shootbudget.infra.db.budget.repository import SqlAlchemyBudgetLineRepository

__all__ = [
    "category_to_orm",
    "category_from_orm",
    "item_to_orm",
    "item_from_orm",
    "SqlAlchemyBudgetLineRepository",
]
