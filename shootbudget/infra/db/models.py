# infra/db/models.py
from __future__ import annotations
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from shootbudget.infra.db.base import Base


class BudgetCategoryORM(Base):
    __tablename__ = "budget_categories"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    department: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    phase: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

Index("idx_budget_categories_project", BudgetCategoryORM.project_id)


class BudgetItemORM(Base):
    __tablename__ = "budget_items"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    category_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("budget_categories.id", ondelete="CASCADE"),
        nullable=False,
    )
    project_id: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, nullable=False)
    estimated_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    actual_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="estimated")
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    unit: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    quantity: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    unit_rate: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    vendor: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    account_code: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    phase: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    linked_crew_member_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    linked_equipment_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    linked_location_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    linked_cast_member_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    linked_schedule_event_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    linked_scene_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

Index("idx_budget_items_project", BudgetItemORM.project_id)
Index("idx_budget_items_category", BudgetItemORM.category_id)


class BudgetVersionORM(Base):
    __tablename__ = "budget_versions"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    created_by: Mapped[str] = mapped_column(String, nullable=False)
    created_by_name: Mapped[str] = mapped_column(String(128), nullable=False)
    total_estimated: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    total_actual: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    category_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    item_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    categories_snapshot_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    items_snapshot_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")

Index("idx_budget_versions_project", BudgetVersionORM.project_id)
Index("idx_budget_versions_created", BudgetVersionORM.created_at)


class BudgetApprovalORM(Base):
    __tablename__ = "budget_approvals"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(String, nullable=False)
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="pending")

    submitted_by: Mapped[str] = mapped_column(String, nullable=False)
    submitted_by_name: Mapped[str] = mapped_column(String(128), nullable=False)
    submitted_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    reviewed_by: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    reviewed_by_name: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    total_estimated: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    total_actual: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    category_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    item_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    previous_total: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    affected_categories_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    changes_summary: Mapped[str] = mapped_column(String, nullable=False, default="")

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

Index("idx_budget_approvals_project", BudgetApprovalORM.project_id)
Index("idx_budget_approvals_status", BudgetApprovalORM.status)


class ApprovalCommentORM(Base):
    """One row per comment; appending never rewrites earlier rows."""

    __tablename__ = "budget_approval_comments"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    approval_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("budget_approvals.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(String, nullable=False)
    user_name: Mapped[str] = mapped_column(String(128), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

Index("idx_budget_approval_comments_approval", ApprovalCommentORM.approval_id)


class AuditLogORM(Base):
    __tablename__ = "audit_logs"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    occurred_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    project_id: Mapped[str] = mapped_column(String, nullable=False)
    action: Mapped[str] = mapped_column(String(64), nullable=False)
    entity_type: Mapped[str] = mapped_column(String(32), nullable=False)
    entity_id: Mapped[str] = mapped_column(String, nullable=False)
    actor_user_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    actor_name: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    details_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")

Index("idx_audit_logs_project", AuditLogORM.project_id, AuditLogORM.occurred_at)
Index("idx_audit_logs_entity", AuditLogORM.entity_id)
