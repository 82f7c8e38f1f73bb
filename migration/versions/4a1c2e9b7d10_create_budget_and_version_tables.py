"""create budget line and budget version tables

Revision ID: 4a1c2e9b7d10
Revises:
Create Date: 2026-10-05
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "4a1c2e9b7d10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "budget_categories",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("department", sa.String(), nullable=True),
        sa.Column("phase", sa.String(length=32), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "budget_items",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("category_id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("estimated_amount", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("actual_amount", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("status", sa.String(length=32), nullable=False, server_default=sa.text("'estimated'")),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("unit", sa.String(length=32), nullable=True),
        sa.Column("quantity", sa.Float(), nullable=True),
        sa.Column("unit_rate", sa.Float(), nullable=True),
        sa.Column("vendor", sa.String(), nullable=True),
        sa.Column("account_code", sa.String(length=64), nullable=True),
        sa.Column("phase", sa.String(length=32), nullable=True),
        sa.Column("linked_crew_member_id", sa.String(), nullable=True),
        sa.Column("linked_equipment_id", sa.String(), nullable=True),
        sa.Column("linked_location_id", sa.String(), nullable=True),
        sa.Column("linked_cast_member_id", sa.String(), nullable=True),
        sa.Column("linked_schedule_event_id", sa.String(), nullable=True),
        sa.Column("linked_scene_id", sa.String(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.ForeignKeyConstraint(["category_id"], ["budget_categories.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "budget_versions",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("created_by", sa.String(), nullable=False),
        sa.Column("created_by_name", sa.String(length=128), nullable=False),
        sa.Column("total_estimated", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("total_actual", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("category_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("item_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("categories_snapshot_json", sa.Text(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column("items_snapshot_json", sa.Text(), nullable=False, server_default=sa.text("'[]'")),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_budget_categories_project", "budget_categories", ["project_id"], unique=False)
    op.create_index("idx_budget_items_project", "budget_items", ["project_id"], unique=False)
    op.create_index("idx_budget_items_category", "budget_items", ["category_id"], unique=False)
    op.create_index("idx_budget_versions_project", "budget_versions", ["project_id"], unique=False)
    op.create_index("idx_budget_versions_created", "budget_versions", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("idx_budget_versions_created", table_name="budget_versions")
    op.drop_index("idx_budget_versions_project", table_name="budget_versions")
    op.drop_index("idx_budget_items_category", table_name="budget_items")
    op.drop_index("idx_budget_items_project", table_name="budget_items")
    op.drop_index("idx_budget_categories_project", table_name="budget_categories")
    op.drop_table("budget_versions")
    op.drop_table("budget_items")
    op.drop_table("budget_categories")
