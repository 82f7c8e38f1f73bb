from shootbudget.core.services.budget.service import BudgetLineService

__all__ = ["BudgetLineService"]
