from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from shootbudget.core.domain import BudgetVersion, CategorySnapshot, ItemSnapshot
from shootbudget.core.services.auth import build_principal
from shootbudget.core.services.reporting import (
    budget_summary,
    category_rollup,
    phase_rollup,
    status_rollup,
    version_trend,
)
from shootbudget.infra.db.version import SqlAlchemyBudgetVersionRepository

PROJECT = "proj-reports"


def _login(services):
    services["user_session"].set_principal(
        build_principal("u-prod", "producer", role_names=["producer"])
    )


def _item(item_id, category_id, estimated, actual=0.0, status="estimated"):
    return ItemSnapshot(
        id=item_id,
        category_id=category_id,
        project_id=PROJECT,
        description=item_id,
        estimated_amount=estimated,
        actual_amount=actual,
        status=status,
    )


CATEGORIES = (
    CategorySnapshot(id="c-cast", project_id=PROJECT, name="Cast", order=0, phase="production"),
    CategorySnapshot(id="c-post", project_id=PROJECT, name="Post", order=1, phase="post-production"),
    CategorySnapshot(id="c-misc", project_id=PROJECT, name="Misc", order=2),
)


def test_category_rollup_sorted_by_estimate_with_variance():
    items = [
        _item("a", "c-cast", 1000, 1200),
        _item("b", "c-post", 3000, 1500),
        _item("c", "c-post", 1000, 0),
        _item("orphan", "c-gone", 999, 999),
    ]

    rows = category_rollup(CATEGORIES, items)

    assert [r.category_name for r in rows] == ["Post", "Cast", "Misc"]
    post, cast, misc = rows
    assert post.estimated == 4000
    assert post.variance == 2500
    assert post.variance_percent == pytest.approx(62.5)
    # the orphan still counts toward the whole budget
    assert post.percent_of_total == pytest.approx(4000 / 5999 * 100)
    assert post.item_count == 2
    assert cast.variance == -200
    assert cast.variance_percent == pytest.approx(-20.0)
    assert misc.estimated == 0
    assert misc.variance_percent == 0.0
    assert misc.percent_of_total == 0.0


def test_category_rollup_ties_keep_category_order():
    items = [_item("a", "c-cast", 500), _item("b", "c-post", 500)]

    rows = category_rollup(CATEGORIES, items)

    assert [r.category_name for r in rows] == ["Cast", "Post", "Misc"]


def test_status_rollup_has_all_groups_in_fixed_order():
    items = [
        _item("a", "c-cast", 100, 0, status="committed"),
        _item("b", "c-cast", 200, 180, status="paid"),
        _item("c", "c-cast", 50, 0, status="bogus"),
        _item("d", "c-cast", 25, 0, status=None),
    ]

    rows = status_rollup(items)

    assert [r.status for r in rows] == ["estimated", "committed", "spent", "paid"]
    by_status = {r.status: r for r in rows}
    assert by_status["estimated"].estimated == 75
    assert by_status["estimated"].item_count == 2
    assert by_status["committed"].estimated == 100
    assert by_status["spent"].item_count == 0
    assert by_status["paid"].actual == 180


def test_status_rollup_of_nothing_is_all_zero():
    rows = status_rollup([])

    assert len(rows) == 4
    assert all(r.estimated == 0 and r.actual == 0 and r.item_count == 0 for r in rows)


def test_category_share_is_of_every_item_passed_in():
    items = [_item("a", "c-cast", 300), _item("gone", "c-deleted", 100)]

    rows = category_rollup(CATEGORIES, items)

    by_name = {r.category_name: r for r in rows}
    assert by_name["Cast"].percent_of_total == pytest.approx(75.0)
    assert sum(r.percent_of_total for r in rows) == pytest.approx(75.0)


def test_phase_rollup_uses_category_phase():
    items = [
        _item("a", "c-post", 300),
        _item("b", "c-cast", 100),
        _item("c", "c-misc", 50),
        _item("d", "c-unknown", 10),
    ]

    rows = phase_rollup(CATEGORIES, items)

    assert [(r.phase, r.estimated, r.item_count) for r in rows] == [
        ("production", 100, 1),
        ("post-production", 300, 1),
        ("other", 50, 1),
    ]


def test_phase_rollup_keeps_empty_phases_and_skips_orphans():
    categories = (
        CategorySnapshot(id="c-shoot", project_id=PROJECT, name="Shoot", order=0, phase="production"),
        CategorySnapshot(id="c-wrap", project_id=PROJECT, name="Wrap party", order=1, phase="wrap"),
    )
    items = [_item("a", "c-shoot", 100, 40), _item("lost", "c-deleted", 50, 50)]

    rows = phase_rollup(categories, items)

    assert [(r.phase, r.estimated, r.actual, r.item_count) for r in rows] == [
        ("production", 100, 40, 1),
        ("wrap", 0, 0, 0),
    ]


def test_phase_rollup_of_no_categories_is_empty():
    assert phase_rollup([], [_item("a", "c-cast", 100)]) == []


def test_budget_summary_totals():
    items = [_item("a", "c-cast", 800, 200), _item("b", "c-post", 200, None)]

    summary = budget_summary(CATEGORIES, items)

    assert summary.total_estimated == 1000
    assert summary.total_actual == 200
    assert summary.variance == 800
    assert summary.variance_percent == pytest.approx(80.0)
    assert summary.category_count == 3
    assert summary.item_count == 2


def test_budget_summary_with_zero_estimate():
    summary = budget_summary([], [])

    assert summary.variance_percent == 0.0
    assert summary.total_estimated == 0


def _stored_version(name, total, when):
    version = BudgetVersion.capture(
        PROJECT,
        name,
        [],
        [],
        created_by="u",
        created_by_name="U",
    )
    return replace(version, created_at=when, total_estimated=total)


def test_version_trend_is_oldest_first_with_deltas():
    base = datetime(2026, 5, 1, tzinfo=timezone.utc)
    versions = [
        _stored_version("Lock", 12000.0, base + timedelta(days=10)),
        _stored_version("Draft", 10000.0, base),
        _stored_version("Revised", 11000.0, base + timedelta(days=3)),
    ]

    points = version_trend(versions)

    assert [p.name for p in points] == ["Draft", "Revised", "Lock"]
    assert [p.change_from_previous for p in points] == [0.0, 1000.0, 1000.0]


def test_reporting_service_reads_live_budget_and_history(services, session):
    _login(services)
    lines = services["budget_line_service"]
    cast = lines.add_category(PROJECT, "Cast", phase="production")
    lines.add_item(PROJECT, cast.id, "Lead", estimated_amount=700.0, actual_amount=100.0, status="spent")

    repo = SqlAlchemyBudgetVersionRepository(session)
    base = datetime(2026, 5, 1, tzinfo=timezone.utc)
    repo.add(_stored_version("v1", 500.0, base))
    repo.add(_stored_version("v2", 650.0, base + timedelta(days=1)))
    session.commit()

    reporting = services["reporting_service"]

    assert [r.category_name for r in reporting.get_category_rollup(PROJECT)] == ["Cast"]
    spent = [r for r in reporting.get_status_rollup(PROJECT) if r.status == "spent"][0]
    assert spent.actual == 100.0
    assert [r.phase for r in reporting.get_phase_rollup(PROJECT)] == ["production"]
    assert [p.change_from_previous for p in reporting.get_version_trend(PROJECT)] == [0.0, 150.0]
    assert reporting.get_budget_summary(PROJECT).total_estimated == 700.0
