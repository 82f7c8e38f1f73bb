import pytest

from shootbudget.core.domain import BudgetPhase
from shootbudget.core.exceptions import (
    BusinessRuleError,
    ConcurrencyError,
    NotFoundError,
    ValidationError,
)
from shootbudget.core.services.auth import build_principal

PROJECT = "proj-lines"


def _login(services, user_id: str = "u-coord", role: str = "coordinator"):
    services["user_session"].set_principal(build_principal(user_id, user_id, role_names=[role]))


def test_categories_keep_insertion_order(services):
    _login(services)
    lines = services["budget_line_service"]
    for name in ["Zeta", "Alpha", "Middle"]:
        lines.add_category(PROJECT, name)

    categories = lines.list_categories(PROJECT)

    assert [c.name for c in categories] == ["Zeta", "Alpha", "Middle"]
    assert [c.order for c in categories] == [0, 1, 2]


def test_reordering_a_category(services):
    _login(services)
    lines = services["budget_line_service"]
    first = lines.add_category(PROJECT, "First")
    lines.add_category(PROJECT, "Second")

    lines.update_category(first.id, order=5)

    assert [c.name for c in lines.list_categories(PROJECT)] == ["Second", "First"]


def test_items_are_grouped_by_category_order(services):
    _login(services)
    lines = services["budget_line_service"]
    cast = lines.add_category(PROJECT, "Cast")
    crew = lines.add_category(PROJECT, "Crew")
    lines.add_item(PROJECT, crew.id, "Best boy", estimated_amount=100)
    lines.add_item(PROJECT, cast.id, "Supporting", estimated_amount=200)
    lines.add_item(PROJECT, cast.id, "Lead", estimated_amount=300)

    items = lines.list_items(PROJECT)

    assert [i.description for i in items] == ["Lead", "Supporting", "Best boy"]


def test_category_phase_is_parsed_and_persisted(services):
    _login(services)
    lines = services["budget_line_service"]
    category = lines.add_category(PROJECT, "Edit", department="Post", phase="Post-Production")

    stored = lines.list_categories(PROJECT)[0]

    assert category.phase == BudgetPhase.POST_PRODUCTION
    assert stored.phase == BudgetPhase.POST_PRODUCTION
    assert stored.department == "Post"


def test_unknown_phase_is_rejected(services):
    _login(services)

    with pytest.raises(ValidationError) as exc:
        services["budget_line_service"].add_category(PROJECT, "Odd", phase="someday")

    assert exc.value.code == "PHASE_INVALID"


def test_item_validation(services):
    _login(services)
    lines = services["budget_line_service"]
    category = lines.add_category(PROJECT, "Gear")

    with pytest.raises(ValidationError) as exc:
        lines.add_item(PROJECT, category.id, "  ")
    assert exc.value.code == "ITEM_DESCRIPTION_REQUIRED"

    with pytest.raises(ValidationError) as exc:
        lines.add_item(PROJECT, category.id, "Dolly", estimated_amount=-5)
    assert exc.value.code == "AMOUNT_NEGATIVE"

    with pytest.raises(ValidationError) as exc:
        lines.add_item(PROJECT, category.id, "Dolly", status="invoiced")
    assert exc.value.code == "ITEM_STATUS_INVALID"

    with pytest.raises(ValidationError) as exc:
        lines.add_item(PROJECT, category.id, "Dolly", colour="red")
    assert exc.value.code == "ITEM_FIELD_UNKNOWN"

    with pytest.raises(ValidationError) as exc:
        lines.add_item("another-project", category.id, "Dolly")
    assert exc.value.code == "CATEGORY_PROJECT_MISMATCH"

    with pytest.raises(NotFoundError):
        lines.add_item(PROJECT, "missing", "Dolly")

    assert lines.list_items(PROJECT) == []


def test_update_item_bumps_version_and_rejects_stale_writes(services):
    _login(services)
    lines = services["budget_line_service"]
    category = lines.add_category(PROJECT, "Gear")
    item = lines.add_item(PROJECT, category.id, "Dolly", estimated_amount=400)

    updated = lines.update_item(item.id, expected_version=1, estimated_amount=450, status="committed")
    assert updated.version == 2
    assert updated.status == "committed"

    with pytest.raises(ConcurrencyError) as exc:
        lines.update_item(item.id, expected_version=1, estimated_amount=999)
    assert exc.value.code == "STALE_WRITE"

    stored = lines.list_items(PROJECT)[0]
    assert stored.estimated_amount == 450
    assert stored.version == 2


def test_move_item_to_another_category(services):
    _login(services)
    lines = services["budget_line_service"]
    gear = lines.add_category(PROJECT, "Gear")
    transport = lines.add_category(PROJECT, "Transport")
    item = lines.add_item(PROJECT, gear.id, "Van", estimated_amount=250)

    lines.update_item(item.id, category_id=transport.id)

    assert lines.list_items(PROJECT)[0].category_id == transport.id


def test_deleting_category_removes_its_items(services):
    _login(services)
    lines = services["budget_line_service"]
    gear = lines.add_category(PROJECT, "Gear")
    keep = lines.add_category(PROJECT, "Catering")
    lines.add_item(PROJECT, gear.id, "Dolly", estimated_amount=400)
    lines.add_item(PROJECT, gear.id, "Jib", estimated_amount=600)
    lines.add_item(PROJECT, keep.id, "Lunch", estimated_amount=90)

    lines.delete_category(gear.id)
    lines.delete_category(gear.id)

    assert [c.name for c in lines.list_categories(PROJECT)] == ["Catering"]
    assert [i.description for i in lines.list_items(PROJECT)] == ["Lunch"]


def test_delete_item_is_idempotent(services):
    _login(services)
    lines = services["budget_line_service"]
    gear = lines.add_category(PROJECT, "Gear")
    item = lines.add_item(PROJECT, gear.id, "Dolly")

    lines.delete_item(item.id)
    lines.delete_item(item.id)

    assert lines.list_items(PROJECT) == []


def test_department_head_cannot_edit_lines(services):
    _login(services, "u-head", "department_head")

    with pytest.raises(BusinessRuleError) as exc:
        services["budget_line_service"].add_category(PROJECT, "Gear")

    assert exc.value.code == "PERMISSION_DENIED"
