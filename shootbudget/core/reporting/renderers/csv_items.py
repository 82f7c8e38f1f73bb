import csv
from pathlib import Path

from shootbudget.core.reporting.contexts import VersionExportContext


def _money(value) -> str:
    return f"{float(value or 0.0):.2f}"


class VersionCsvRenderer:
    """Summary, category and line item sections in one CSV file."""

    def render(self, ctx: VersionExportContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        version = ctx.version
        names = {c.id: c.name for c in version.categories_snapshot}

        with output_path.open("w", newline="", encoding="utf-8") as fh:
            writer = csv.writer(fh)
            writer.writerow([f"{version.name} - Budget Export"])
            writer.writerow([f"Generated: {ctx.generated_at.isoformat()}"])
            writer.writerow([])

            writer.writerow(["BUDGET SUMMARY"])
            writer.writerow(["Total Estimated", _money(ctx.summary.total_estimated)])
            writer.writerow(["Total Actual", _money(ctx.summary.total_actual)])
            writer.writerow(["Variance", _money(ctx.summary.variance)])
            writer.writerow([])

            writer.writerow(["CATEGORIES"])
            writer.writerow(["Category", "Estimated", "Actual", "Variance", "Item Count"])
            for row in ctx.categories:
                writer.writerow(
                    [
                        row.category_name,
                        _money(row.estimated),
                        _money(row.actual),
                        _money(row.variance),
                        row.item_count,
                    ]
                )
            writer.writerow([])

            writer.writerow(["LINE ITEMS"])
            writer.writerow(
                ["Category", "Description", "Estimated", "Actual", "Variance", "Status", "Unit", "Quantity", "Unit Rate"]
            )
            for item in version.items_snapshot:
                est = float(item.estimated_amount or 0.0)
                act = float(item.actual_amount or 0.0)
                writer.writerow(
                    [
                        names.get(item.category_id, "Uncategorized"),
                        item.description,
                        _money(est),
                        _money(act),
                        _money(est - act),
                        item.status or "estimated",
                        item.unit or "",
                        "" if item.quantity is None else item.quantity,
                        "" if item.unit_rate is None else _money(item.unit_rate),
                    ]
                )
        return output_path
