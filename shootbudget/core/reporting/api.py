"""Export API wrappers around renderer classes."""

from datetime import datetime, timezone
from pathlib import Path

from shootbudget.core.domain import BudgetVersion
from shootbudget.core.reporting.contexts import ComparisonExportContext, VersionExportContext
from shootbudget.core.reporting.renderers.csv_items import VersionCsvRenderer
from shootbudget.core.reporting.renderers.excel import ComparisonExcelRenderer, VersionExcelRenderer
from shootbudget.core.services.reporting import budget_summary, category_rollup, status_rollup
from shootbudget.core.services.versioning import BudgetVersionService


def _ensure_parent(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _version_context(version: BudgetVersion) -> VersionExportContext:
    return VersionExportContext(
        version=version,
        summary=budget_summary(version.categories_snapshot, version.items_snapshot),
        categories=category_rollup(version.categories_snapshot, version.items_snapshot),
        statuses=status_rollup(version.items_snapshot),
        generated_at=datetime.now(timezone.utc),
    )


def generate_version_excel(
    version_service: BudgetVersionService,
    version_id: str,
    output_path: str | Path,
) -> Path:
    version = version_service.get_version(version_id)
    return VersionExcelRenderer().render(_version_context(version), _ensure_parent(Path(output_path)))


def generate_version_csv(
    version_service: BudgetVersionService,
    version_id: str,
    output_path: str | Path,
) -> Path:
    version = version_service.get_version(version_id)
    return VersionCsvRenderer().render(_version_context(version), _ensure_parent(Path(output_path)))


def generate_comparison_excel(
    version_service: BudgetVersionService,
    version_a_id: str,
    version_b_id: str,
    output_path: str | Path,
) -> Path:
    diff = version_service.compare(version_a_id, version_b_id)
    ctx = ComparisonExportContext(
        version_a=version_service.get_version(version_a_id),
        version_b=version_service.get_version(version_b_id),
        diff=diff,
        generated_at=datetime.now(timezone.utc),
    )
    return ComparisonExcelRenderer().render(ctx, _ensure_parent(Path(output_path)))
