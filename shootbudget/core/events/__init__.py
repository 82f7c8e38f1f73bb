from shootbudget.core.events.budget_events import BudgetEvents
from shootbudget.core.events.signal import Signal

__all__ = ["BudgetEvents", "Signal"]
