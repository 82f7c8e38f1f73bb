from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from shootbudget.core.domain import ItemSnapshot


@dataclass(frozen=True)
class ChangedItem:
    id: str
    description: str
    estimated_before: float
    estimated_after: float
    actual_before: float
    actual_after: float

    @property
    def estimated_delta(self) -> float:
        return self.estimated_after - self.estimated_before

    @property
    def actual_delta(self) -> float:
        return self.actual_after - self.actual_before


@dataclass(frozen=True)
class VersionDiff:
    estimated_diff: float
    actual_diff: float
    category_diff: int
    item_diff: int
    percent_change: float
    added_items: Tuple[ItemSnapshot, ...]
    removed_items: Tuple[ItemSnapshot, ...]
    changed_items: Tuple[ChangedItem, ...]

    @property
    def has_changes(self) -> bool:
        return bool(
            self.added_items
            or self.removed_items
            or self.changed_items
            or self.estimated_diff
            or self.actual_diff
            or self.category_diff
        )


__all__ = ["ChangedItem", "VersionDiff"]
