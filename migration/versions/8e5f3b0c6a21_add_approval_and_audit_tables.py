"""add budget approval, approval comment and audit tables

Revision ID: 8e5f3b0c6a21
Revises: 4a1c2e9b7d10
Create Date: 2026-10-05
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "8e5f3b0c6a21"
down_revision = "4a1c2e9b7d10"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "budget_approvals",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("status", sa.String(length=32), nullable=False, server_default=sa.text("'pending'")),
        sa.Column("submitted_by", sa.String(), nullable=False),
        sa.Column("submitted_by_name", sa.String(length=128), nullable=False),
        sa.Column("submitted_at", sa.DateTime(), nullable=False),
        sa.Column("reviewed_by", sa.String(), nullable=True),
        sa.Column("reviewed_by_name", sa.String(length=128), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(), nullable=True),
        sa.Column("total_estimated", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("total_actual", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("category_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("item_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("previous_total", sa.Float(), nullable=True),
        sa.Column("affected_categories_json", sa.Text(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column("changes_summary", sa.String(), nullable=False, server_default=sa.text("''")),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "budget_approval_comments",
        sa.Column("seq", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("approval_id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("user_name", sa.String(length=128), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["approval_id"], ["budget_approvals.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("seq"),
        sa.UniqueConstraint("id"),
    )
    op.create_table(
        "audit_logs",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("occurred_at", sa.DateTime(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("action", sa.String(length=64), nullable=False),
        sa.Column("entity_type", sa.String(length=32), nullable=False),
        sa.Column("entity_id", sa.String(), nullable=False),
        sa.Column("actor_user_id", sa.String(), nullable=True),
        sa.Column("actor_name", sa.String(length=128), nullable=True),
        sa.Column("details_json", sa.Text(), nullable=False, server_default=sa.text("'{}'")),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_budget_approvals_project", "budget_approvals", ["project_id"], unique=False)
    op.create_index("idx_budget_approvals_status", "budget_approvals", ["status"], unique=False)
    op.create_index(
        "idx_budget_approval_comments_approval",
        "budget_approval_comments",
        ["approval_id"],
        unique=False,
    )
    op.create_index(
        "idx_audit_logs_project",
        "audit_logs",
        ["project_id", "occurred_at"],
        unique=False,
    )
    op.create_index("idx_audit_logs_entity", "audit_logs", ["entity_id"], unique=False)


def downgrade() -> None:
    op.drop_index("idx_audit_logs_entity", table_name="audit_logs")
    op.drop_index("idx_audit_logs_project", table_name="audit_logs")
    op.drop_index("idx_budget_approval_comments_approval", table_name="budget_approval_comments")
    op.drop_index("idx_budget_approvals_status", table_name="budget_approvals")
    op.drop_index("idx_budget_approvals_project", table_name="budget_approvals")
    op.drop_table("audit_logs")
    op.drop_table("budget_approval_comments")
    op.drop_table("budget_approvals")
