"""Change notifications for budget lines, versions and approvals (payload: project_id)."""
from __future__ import annotations

from shootbudget.core.events.signal import Signal


class BudgetEvents:
    def __init__(self) -> None:
        self.budget_lines_changed: Signal[str] = Signal()
        self.versions_changed: Signal[str] = Signal()
        self.approvals_changed: Signal[str] = Signal()


__all__ = ["BudgetEvents"]
