"""Add fabrics, projects, patterns and usage_history tables.

Revision ID: 20250302000000
Revises: 20250301000000
Create Date: 2025-03-02

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20250302000000"
down_revision: Union[str, None] = "20250301000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def _owner() -> sa.Column:
    return sa.Column(
        "user_id",
        sa.String(length=36),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "fabrics",
        sa.Column("id", sa.String(length=36), nullable=False),
        _owner(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=255), nullable=True),
        sa.Column("fiber_content", sa.String(length=255), nullable=True),
        sa.Column("weight", sa.String(length=64), nullable=True),
        sa.Column("color", sa.String(length=255), nullable=True),
        sa.Column("pattern", sa.String(length=255), nullable=True),
        sa.Column("width", sa.Float(), nullable=True),
        sa.Column("total_yards", sa.Float(), nullable=False),
        sa.Column("cost_per_yard", sa.Float(), nullable=True),
        sa.Column("total_cost", sa.Float(), nullable=True),
        sa.Column("source", sa.String(length=255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(length=2048), nullable=True),
        sa.Column("is_pinned", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("total_yards >= 0", name="ck_fabrics_total_yards"),
    )
    op.create_index(op.f("ix_fabrics_user_id"), "fabrics", ["user_id"], unique=False)

    op.create_table(
        "projects",
        sa.Column("id", sa.String(length=36), nullable=False),
        _owner(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="planning"),
        sa.Column("image_url", sa.String(length=2048), nullable=True),
        sa.Column("target_date", sa.Date(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_projects_user_id"), "projects", ["user_id"], unique=False)

    op.create_table(
        "patterns",
        sa.Column("id", sa.String(length=36), nullable=False),
        _owner(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("designer", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("pattern_number", sa.String(length=64), nullable=True),
        sa.Column("category", sa.String(length=32), nullable=False),
        sa.Column("difficulty", sa.String(length=32), nullable=False),
        sa.Column("size_range", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("fabric_requirements", sa.Text(), nullable=True),
        sa.Column("notions", sa.Text(), nullable=True),
        sa.Column("instructions", sa.Text(), nullable=True),
        sa.Column("pdf_url", sa.String(length=2048), nullable=True),
        sa.Column("thumbnail_url", sa.String(length=2048), nullable=True),
        sa.Column("is_pinned", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_patterns_user_id"), "patterns", ["user_id"], unique=False)

    op.create_table(
        "usage_history",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column(
            "fabric_id",
            sa.String(length=36),
            sa.ForeignKey("fabrics.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _owner(),
        sa.Column(
            "project_id",
            sa.String(length=36),
            sa.ForeignKey("projects.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("yards_used", sa.Float(), nullable=False),
        sa.Column("project_name", sa.String(length=255), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "usage_date",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("yards_used > 0", name="ck_usage_history_yards_used"),
    )
    op.create_index(
        op.f("ix_usage_history_fabric_id"), "usage_history", ["fabric_id"], unique=False
    )
    op.create_index(
        op.f("ix_usage_history_user_id"), "usage_history", ["user_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_usage_history_user_id"), table_name="usage_history")
    op.drop_index(op.f("ix_usage_history_fabric_id"), table_name="usage_history")
    op.drop_table("usage_history")
    op.drop_index(op.f("ix_patterns_user_id"), table_name="patterns")
    op.drop_table("patterns")
    op.drop_index(op.f("ix_projects_user_id"), table_name="projects")
    op.drop_table("projects")
    op.drop_index(op.f("ix_fabrics_user_id"), table_name="fabrics")
    op.drop_table("fabrics")
