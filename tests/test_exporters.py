import csv

import pytest
from openpyxl import load_workbook

from shootbudget.core.exceptions import NotFoundError
from shootbudget.core.reporting import (
    generate_comparison_excel,
    generate_version_csv,
    generate_version_excel,
)
from shootbudget.core.services.auth import build_principal

PROJECT = "proj-export"


def _seed_versions(services):
    services["user_session"].set_principal(
        build_principal("u-prod", "producer", role_names=["producer"], display_name="Pat Producer")
    )
    lines = services["budget_line_service"]
    versions = services["version_service"]
    camera = lines.add_category(PROJECT, "Camera", phase="production")
    post = lines.add_category(PROJECT, "Post", phase="post-production")
    body = lines.add_item(PROJECT, camera.id, "Camera body", estimated_amount=4000.0, actual_amount=3500.0, status="paid")
    lens = lines.add_item(PROJECT, camera.id, "Lens kit", estimated_amount=1000.0, unit="days", quantity=4, unit_rate=250.0)
    grade = lines.add_item(PROJECT, post.id, "Grade", estimated_amount=2000.0)
    first = versions.capture_current_version(PROJECT, "Draft")

    lines.update_item(body.id, estimated_amount=4500.0)
    lines.delete_item(lens.id)
    lines.add_item(PROJECT, post.id, "Sound mix", estimated_amount=800.0)
    second = versions.capture_current_version(PROJECT, "Lock")
    return first, second, grade


def test_version_excel_has_expected_sheets(services, tmp_path):
    first, _, _ = _seed_versions(services)

    path = generate_version_excel(services["version_service"], first.id, tmp_path / "out" / "draft.xlsx")

    assert path.exists()
    wb = load_workbook(path)
    assert wb.sheetnames == ["Summary", "Categories", "Line items", "Status"]
    assert wb["Summary"]["A1"].value == "Budget version - Draft"

    categories = wb["Categories"]
    assert categories["A1"].value == "Category"
    assert [categories.cell(row=r, column=1).value for r in (2, 3)] == ["Camera", "Post"]
    assert categories["B2"].value == 5000.0

    items = wb["Line items"]
    descriptions = [items.cell(row=r, column=2).value for r in range(2, items.max_row + 1)]
    assert descriptions == ["Camera body", "Lens kit", "Grade"]

    status = wb["Status"]
    assert [status.cell(row=r, column=1).value for r in range(2, 6)] == ["estimated", "committed", "spent", "paid"]
    assert status["C5"].value == 3500.0


def test_version_csv_sections(services, tmp_path):
    first, _, _ = _seed_versions(services)

    path = generate_version_csv(services["version_service"], first.id, tmp_path / "draft.csv")

    with path.open(newline="", encoding="utf-8") as fh:
        rows = list(csv.reader(fh))
    flat = [row[0] for row in rows if row]
    assert rows[0] == ["Draft - Budget Export"]
    assert flat.index("BUDGET SUMMARY") < flat.index("CATEGORIES") < flat.index("LINE ITEMS")
    assert ["Total Estimated", "7000.00"] in rows
    assert ["Total Actual", "3500.00"] in rows
    assert ["Variance", "3500.00"] in rows
    assert ["Camera", "5000.00", "3500.00", "1500.00", "2"] in rows
    assert ["Camera", "Lens kit", "1000.00", "0.00", "1000.00", "estimated", "days", "4.0", "250.00"] in rows


def test_comparison_excel(services, tmp_path):
    first, second, _ = _seed_versions(services)

    path = generate_comparison_excel(
        services["version_service"],
        first.id,
        second.id,
        tmp_path / "compare.xlsx",
    )

    wb = load_workbook(path)
    assert wb.sheetnames == ["Comparison", "Changed", "Added", "Removed"]
    ws = wb["Comparison"]
    assert ws["A1"].value == "Draft vs Lock"
    assert ws["B4"].value == 7000.0
    assert ws["C4"].value == 7300.0
    assert ws["D4"].value == 300.0
    assert wb["Changed"]["B2"].value == "Camera body"
    assert wb["Added"]["B2"].value == "Sound mix"
    assert wb["Removed"]["B2"].value == "Lens kit"


def test_export_of_missing_version_raises(services, tmp_path):
    with pytest.raises(NotFoundError):
        generate_version_excel(services["version_service"], "missing", tmp_path / "x.xlsx")
