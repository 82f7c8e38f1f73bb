from __future__ import annotations

from typing import Any

from shootbudget.core.domain import BudgetApproval, BudgetCategory, BudgetItem, BudgetVersion


def _phase(value) -> str | None:
    return getattr(value, "value", value)


def subject_details(subject: Any) -> dict[str, Any]:
    """What the audit trail remembers about each kind of budget record."""
    if isinstance(subject, BudgetVersion):
        return {
            "name": subject.name,
            "total_estimated": subject.total_estimated,
            "total_actual": subject.total_actual,
            "item_count": subject.item_count,
        }
    if isinstance(subject, BudgetApproval):
        return {
            "title": subject.title,
            "status": subject.status.value,
            "total_estimated": subject.total_estimated,
            "changes_summary": subject.changes_summary,
        }
    if isinstance(subject, BudgetItem):
        return {
            "description": subject.description,
            "category_id": subject.category_id,
            "estimated_amount": subject.estimated_amount,
            "actual_amount": subject.actual_amount,
            "status": subject.status,
        }
    if isinstance(subject, BudgetCategory):
        return {"name": subject.name, "phase": _phase(subject.phase)}
    raise TypeError(f"No audit details for {type(subject).__name__}")


__all__ = ["subject_details"]
