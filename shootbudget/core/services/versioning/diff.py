from __future__ import annotations

from shootbudget.core.domain import BudgetVersion, ItemSnapshot
from shootbudget.core.services.versioning.models import ChangedItem, VersionDiff


def _amount(value: float | None) -> float:
    return float(value or 0.0)


def compare_versions(version_a: BudgetVersion, version_b: BudgetVersion) -> VersionDiff:
    """
    Structural diff from version A (before) to version B (after).

    Items are matched by id only. An item counts as changed when its estimated
    or actual amount differs; description or category edits alone are not
    reported. Added and changed items follow B's order, removed items follow A's.

    Missing amounts are read as 0 before comparing, so an amount going from
    unset to 0 (or back) is not a change, and ``ChangedItem`` always carries
    floats.
    """
    estimated_diff = version_b.total_estimated - version_a.total_estimated
    actual_diff = version_b.total_actual - version_a.total_actual

    items_a: dict[str, ItemSnapshot] = {item.id: item for item in version_a.items_snapshot}
    ids_b = {item.id for item in version_b.items_snapshot}

    added = tuple(item for item in version_b.items_snapshot if item.id not in items_a)
    removed = tuple(item for item in version_a.items_snapshot if item.id not in ids_b)

    changed: list[ChangedItem] = []
    for item_b in version_b.items_snapshot:
        item_a = items_a.get(item_b.id)
        if item_a is None:
            continue
        estimated_before = _amount(item_a.estimated_amount)
        estimated_after = _amount(item_b.estimated_amount)
        actual_before = _amount(item_a.actual_amount)
        actual_after = _amount(item_b.actual_amount)
        if estimated_before == estimated_after and actual_before == actual_after:
            continue
        changed.append(
            ChangedItem(
                id=item_b.id,
                description=item_b.description,
                estimated_before=estimated_before,
                estimated_after=estimated_after,
                actual_before=actual_before,
                actual_after=actual_after,
            )
        )

    # Zero base means "no meaningful percentage", not "no change".
    percent_change = (
        (estimated_diff / version_a.total_estimated) * 100
        if version_a.total_estimated > 0
        else 0.0
    )

    return VersionDiff(
        estimated_diff=estimated_diff,
        actual_diff=actual_diff,
        category_diff=version_b.category_count - version_a.category_count,
        item_diff=version_b.item_count - version_a.item_count,
        percent_change=percent_change,
        added_items=added,
        removed_items=removed,
        changed_items=tuple(changed),
    )


__all__ = ["compare_versions"]
