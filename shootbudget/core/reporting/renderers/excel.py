from pathlib import Path
from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side

from shootbudget.core.reporting.contexts import ComparisonExportContext, VersionExportContext

_header_font = Font(bold=True)
_title_font = Font(bold=True, size=14)
_center = Alignment(horizontal="center")
_thin_border = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)
_header_fill = PatternFill("solid", fgColor="DDDDDD")
_money_format = "#,##0.00"


def _header_row(ws, headers, row=1):
    for col_index, h in enumerate(headers, start=1):
        cell = ws.cell(row=row, column=col_index, value=h)
        cell.font = _header_font
        cell.alignment = _center
        cell.fill = _header_fill
        cell.border = _thin_border


def _body_row(ws, row, values, money_columns=()):
    for col_index, v in enumerate(values, start=1):
        cell = ws.cell(row=row, column=col_index, value=v)
        cell.border = _thin_border
        if col_index in money_columns:
            cell.number_format = _money_format


def _key_values(ws, start_row, rows):
    row = start_row
    for key, value in rows:
        ws[f"A{row}"] = key
        ws[f"B{row}"] = value
        ws[f"A{row}"].font = _header_font
        ws[f"A{row}"].border = _thin_border
        ws[f"B{row}"].border = _thin_border
        if isinstance(value, float):
            ws[f"B{row}"].number_format = _money_format
        row += 1
    return row


class VersionExcelRenderer:
    def render(self, ctx: VersionExportContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb = Workbook()
        version = ctx.version

        # ---------------- Summary ----------------
        ws = wb.active
        ws.title = "Summary"
        ws["A1"] = f"Budget version - {version.name}"
        ws["A1"].font = _title_font

        row = _key_values(
            ws,
            3,
            [
                ("Version ID", version.id),
                ("Project ID", version.project_id),
                ("Description", version.description),
                ("Created at", version.created_at.isoformat()),
                ("Created by", version.created_by_name),
                ("Generated at", ctx.generated_at.isoformat()),
            ],
        )
        _key_values(
            ws,
            row + 1,
            [
                ("Total estimated", float(ctx.summary.total_estimated)),
                ("Total actual", float(ctx.summary.total_actual)),
                ("Variance", float(ctx.summary.variance)),
                ("Categories", ctx.summary.category_count),
                ("Line items", ctx.summary.item_count),
            ],
        )
        ws.column_dimensions["A"].width = 22
        ws.column_dimensions["B"].width = 40

        # ---------------- Categories ----------------
        ws_cat = wb.create_sheet("Categories")
        _header_row(ws_cat, ["Category", "Estimated", "Actual", "Variance", "Variance %", "% of total", "Items"])
        for r, c in enumerate(ctx.categories, start=2):
            _body_row(
                ws_cat,
                r,
                [
                    c.category_name,
                    c.estimated,
                    c.actual,
                    c.variance,
                    round(c.variance_percent, 2),
                    round(c.percent_of_total, 2),
                    c.item_count,
                ],
                money_columns=(2, 3, 4),
            )
        ws_cat.column_dimensions["A"].width = 30
        for col_letter in ("B", "C", "D", "E", "F", "G"):
            ws_cat.column_dimensions[col_letter].width = 15

        # ---------------- Line items ----------------
        ws_items = wb.create_sheet("Line items")
        _header_row(
            ws_items,
            ["Category", "Description", "Estimated", "Actual", "Variance", "Status", "Unit", "Quantity", "Unit rate"],
        )
        names = {c.id: c.name for c in version.categories_snapshot}
        for r, item in enumerate(version.items_snapshot, start=2):
            est = float(item.estimated_amount or 0.0)
            act = float(item.actual_amount or 0.0)
            _body_row(
                ws_items,
                r,
                [
                    names.get(item.category_id, "Uncategorized"),
                    item.description,
                    est,
                    act,
                    est - act,
                    item.status or "estimated",
                    item.unit or "",
                    item.quantity,
                    item.unit_rate,
                ],
                money_columns=(3, 4, 5, 9),
            )
        ws_items.column_dimensions["A"].width = 24
        ws_items.column_dimensions["B"].width = 36
        for col_letter in ("C", "D", "E", "F", "G", "H", "I"):
            ws_items.column_dimensions[col_letter].width = 14

        # ---------------- Status ----------------
        ws_status = wb.create_sheet("Status")
        _header_row(ws_status, ["Status", "Estimated", "Actual", "Items"])
        for r, s in enumerate(ctx.statuses, start=2):
            _body_row(ws_status, r, [s.status, s.estimated, s.actual, s.item_count], money_columns=(2, 3))
        ws_status.column_dimensions["A"].width = 16

        wb.save(output_path)
        return output_path


class ComparisonExcelRenderer:
    def render(self, ctx: ComparisonExportContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb = Workbook()
        diff = ctx.diff

        ws = wb.active
        ws.title = "Comparison"
        ws["A1"] = f"{ctx.version_a.name} vs {ctx.version_b.name}"
        ws["A1"].font = _title_font

        _header_row(ws, ["Metric", ctx.version_a.name, ctx.version_b.name, "Change"], row=3)
        rows = [
            ("Total estimated", ctx.version_a.total_estimated, ctx.version_b.total_estimated, diff.estimated_diff),
            ("Total actual", ctx.version_a.total_actual, ctx.version_b.total_actual, diff.actual_diff),
            ("Categories", ctx.version_a.category_count, ctx.version_b.category_count, diff.category_diff),
            ("Line items", ctx.version_a.item_count, ctx.version_b.item_count, diff.item_diff),
        ]
        for r, values in enumerate(rows, start=4):
            _body_row(ws, r, list(values), money_columns=(2, 3, 4) if r < 6 else ())
        ws.cell(row=9, column=1, value="Percent change").font = _header_font
        ws.cell(row=9, column=2, value=round(diff.percent_change, 2))
        ws.column_dimensions["A"].width = 22
        for col_letter in ("B", "C", "D"):
            ws.column_dimensions[col_letter].width = 20

        ws_changed = wb.create_sheet("Changed")
        _header_row(
            ws_changed,
            ["Item ID", "Description", "Estimated before", "Estimated after", "Actual before", "Actual after"],
        )
        for r, c in enumerate(diff.changed_items, start=2):
            _body_row(
                ws_changed,
                r,
                [c.id, c.description, c.estimated_before, c.estimated_after, c.actual_before, c.actual_after],
                money_columns=(3, 4, 5, 6),
            )

        for title, items in (("Added", diff.added_items), ("Removed", diff.removed_items)):
            sheet = wb.create_sheet(title)
            _header_row(sheet, ["Item ID", "Description", "Estimated", "Actual"])
            for r, item in enumerate(items, start=2):
                _body_row(
                    sheet,
                    r,
                    [item.id, item.description, float(item.estimated_amount or 0.0), float(item.actual_amount or 0.0)],
                    money_columns=(3, 4),
                )

        for sheet in wb.worksheets[1:]:
            sheet.column_dimensions["A"].width = 36
            sheet.column_dimensions["B"].width = 36

        wb.save(output_path)
        return output_path
