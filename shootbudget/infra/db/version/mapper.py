from __future__ import annotations

import json
from dataclasses import asdict, fields
from typing import Any

from shootbudget.core.domain import BudgetVersion, CategorySnapshot, ItemSnapshot
from shootbudget.infra.db.models import BudgetVersionORM
from shootbudget.infra.db.timestamps import as_utc

_CATEGORY_FIELDS = {f.name for f in fields(CategorySnapshot)}
_ITEM_FIELDS = {f.name for f in fields(ItemSnapshot)}


def _to_json(rows: list[dict[str, Any]]) -> str:
    return json.dumps(rows, default=str, ensure_ascii=False)


def _from_json(raw: str | None) -> list[dict[str, Any]]:
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        return []
    return [row for row in value if isinstance(row, dict)] if isinstance(value, list) else []


def version_to_orm(version: BudgetVersion) -> BudgetVersionORM:
    return BudgetVersionORM(
        id=version.id,
        project_id=version.project_id,
        name=version.name,
        description=version.description or "",
        created_at=version.created_at,
        created_by=version.created_by,
        created_by_name=version.created_by_name,
        total_estimated=version.total_estimated,
        total_actual=version.total_actual,
        category_count=version.category_count,
        item_count=version.item_count,
        categories_snapshot_json=_to_json([asdict(c) for c in version.categories_snapshot]),
        items_snapshot_json=_to_json([asdict(i) for i in version.items_snapshot]),
    )


def version_from_orm(obj: BudgetVersionORM) -> BudgetVersion:
    # unknown keys are dropped so older rows keep loading after a field is removed
    categories = tuple(
        CategorySnapshot(**{k: v for k, v in row.items() if k in _CATEGORY_FIELDS})
        for row in _from_json(obj.categories_snapshot_json)
    )
    items = tuple(
        ItemSnapshot(**{k: v for k, v in row.items() if k in _ITEM_FIELDS})
        for row in _from_json(obj.items_snapshot_json)
    )
    return BudgetVersion(
        id=obj.id,
        project_id=obj.project_id,
        name=obj.name,
        description=obj.description or "",
        created_at=as_utc(obj.created_at),
        created_by=obj.created_by,
        created_by_name=obj.created_by_name,
        total_estimated=obj.total_estimated,
        total_actual=obj.total_actual,
        category_count=obj.category_count,
        item_count=obj.item_count,
        categories_snapshot=categories,
        items_snapshot=items,
    )


__all__ = ["version_to_orm", "version_from_orm"]
