from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from shootbudget.core.domain import BudgetItemStatus, BudgetPhase, BudgetVersion, budget_totals
from shootbudget.core.services.reporting.models import (
    BudgetSummary,
    CategoryRollupRow,
    PhaseRollupRow,
    StatusRollupRow,
    VersionTrendPoint,
)

# Fixed display order of the status groups.
STATUS_GROUPS = tuple(s.value for s in BudgetItemStatus)


def _amount(value) -> float:
    return float(value or 0.0)


def _variance_percent(estimated: float, actual: float) -> float:
    if estimated <= 0:
        return 0.0
    return (estimated - actual) / estimated * 100.0


def _status_key(item) -> str:
    raw = getattr(item, "status", None)
    raw = str(getattr(raw, "value", raw) or "").strip().lower()
    return raw if raw in STATUS_GROUPS else BudgetItemStatus.ESTIMATED.value


def category_rollup(categories: Iterable, items: Iterable) -> List[CategoryRollupRow]:
    """
    Estimated vs actual per category, largest estimate first.

    Items pointing at a category that is not in ``categories`` get no row,
    but ``percent_of_total`` is measured against the estimate of every item
    passed in, so the shares need not add up to 100.
    """
    category_rows = list(categories)
    item_rows = list(items)

    est_by_cat: Dict[str, float] = {}
    act_by_cat: Dict[str, float] = {}
    count_by_cat: Dict[str, int] = {}
    for item in item_rows:
        cat_id = item.category_id
        est_by_cat[cat_id] = est_by_cat.get(cat_id, 0.0) + _amount(item.estimated_amount)
        act_by_cat[cat_id] = act_by_cat.get(cat_id, 0.0) + _amount(item.actual_amount)
        count_by_cat[cat_id] = count_by_cat.get(cat_id, 0) + 1

    grand_total = budget_totals(item_rows)[0]

    rows: List[CategoryRollupRow] = []
    for cat in category_rows:
        est = est_by_cat.get(cat.id, 0.0)
        act = act_by_cat.get(cat.id, 0.0)
        rows.append(
            CategoryRollupRow(
                category_id=cat.id,
                category_name=cat.name,
                estimated=est,
                actual=act,
                variance=est - act,
                variance_percent=_variance_percent(est, act),
                percent_of_total=(est / grand_total * 100.0) if grand_total > 0 else 0.0,
                item_count=count_by_cat.get(cat.id, 0),
            )
        )
    # stable: ties keep the caller's category order
    rows.sort(key=lambda r: r.estimated, reverse=True)
    return rows


def status_rollup(items: Iterable) -> List[StatusRollupRow]:
    estimated = {status: 0.0 for status in STATUS_GROUPS}
    actual = {status: 0.0 for status in STATUS_GROUPS}
    counts = {status: 0 for status in STATUS_GROUPS}
    for item in items:
        key = _status_key(item)
        estimated[key] += _amount(item.estimated_amount)
        actual[key] += _amount(item.actual_amount)
        counts[key] += 1
    return [
        StatusRollupRow(
            status=status,
            estimated=estimated[status],
            actual=actual[status],
            item_count=counts[status],
        )
        for status in STATUS_GROUPS
    ]


def phase_rollup(categories: Iterable, items: Iterable) -> List[PhaseRollupRow]:
    """
    Totals per production phase, one row for every phase a category carries.

    A phase whose categories hold no items still gets a zero row; categories
    with no phase count as ``other``. Items whose category is not in
    ``categories`` are left out.
    """
    phase_by_cat: Dict[str, str] = {}
    for cat in categories:
        phase = getattr(cat.phase, "value", cat.phase)
        phase_by_cat[cat.id] = phase or BudgetPhase.OTHER.value

    est: Dict[str, float] = {phase: 0.0 for phase in phase_by_cat.values()}
    act: Dict[str, float] = dict(est)
    counts: Dict[str, int] = {phase: 0 for phase in est}
    for item in items:
        phase = phase_by_cat.get(item.category_id)
        if phase is None:
            continue
        est[phase] += _amount(item.estimated_amount)
        act[phase] += _amount(item.actual_amount)
        counts[phase] += 1

    order = [p.value for p in BudgetPhase]
    return [
        PhaseRollupRow(phase=phase, estimated=est[phase], actual=act[phase], item_count=counts[phase])
        for phase in order
        if phase in counts
    ]


def version_trend(versions: Iterable[BudgetVersion]) -> List[VersionTrendPoint]:
    ordered = sorted(versions, key=lambda v: v.created_at)
    points: List[VersionTrendPoint] = []
    previous: Optional[float] = None
    for version in ordered:
        total = _amount(version.total_estimated)
        points.append(
            VersionTrendPoint(
                version_id=version.id,
                name=version.name,
                created_at=version.created_at,
                total_estimated=total,
                total_actual=_amount(version.total_actual),
                change_from_previous=0.0 if previous is None else total - previous,
            )
        )
        previous = total
    return points


def budget_summary(categories: Iterable, items: Iterable) -> BudgetSummary:
    category_rows = list(categories)
    item_rows = list(items)
    total_est = sum(_amount(i.estimated_amount) for i in item_rows)
    total_act = sum(_amount(i.actual_amount) for i in item_rows)
    return BudgetSummary(
        total_estimated=total_est,
        total_actual=total_act,
        variance=total_est - total_act,
        variance_percent=_variance_percent(total_est, total_act),
        category_count=len(category_rows),
        item_count=len(item_rows),
    )


__all__ = [
    "STATUS_GROUPS",
    "category_rollup",
    "status_rollup",
    "phase_rollup",
    "version_trend",
    "budget_summary",
]
