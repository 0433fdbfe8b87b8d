"""Create catalog tables.

Revision ID: 0001
Revises:
Create Date: 2026-09-28 10:12:00

"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

from toolsync.adapters.sqlalchemy.mappings import UTCDateTime

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _entry_columns() -> list[sa.Column[object]]:
    return [
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("website", sa.String(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("long_description", sa.Text(), nullable=True),
        sa.Column("logo_url", sa.String(), nullable=True),
        sa.Column("category_id", sa.Uuid(), nullable=True),
        sa.Column("submitted_by", sa.String(), nullable=True),
        sa.Column("additional_info", sa.JSON(), nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.Column("updated_at", UTCDateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "category",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_category"),
        sa.UniqueConstraint("slug", name="uq_category_slug"),
    )

    op.create_table(
        "tool",
        *_entry_columns(),
        sa.Column("upvotes", sa.Integer(), nullable=False),
        sa.Column("total_reviews", sa.Integer(), nullable=False),
        sa.Column("overall_score", sa.Float(), nullable=False),
        sa.ForeignKeyConstraint(
            ["category_id"],
            ["category.id"],
            name="fk_tool_category_id_category",
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_tool"),
    )
    op.create_index("ix_tool_name", "tool", ["name"])
    op.create_index("ix_tool_website", "tool", ["website"])

    op.create_table(
        "tool_submission",
        *_entry_columns(),
        sa.Column(
            "status",
            sa.Enum(
                "pending",
                "approved",
                "rejected",
                name="submissionstatus",
                native_enum=False,
            ),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(
            ["category_id"],
            ["category.id"],
            name="fk_tool_submission_category_id_category",
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_tool_submission"),
    )
    op.create_index("ix_tool_submission_name", "tool_submission", ["name"])
    op.create_index("ix_tool_submission_website", "tool_submission", ["website"])


def downgrade() -> None:
    op.drop_index("ix_tool_submission_website", table_name="tool_submission")
    op.drop_index("ix_tool_submission_name", table_name="tool_submission")
    op.drop_table("tool_submission")
    op.drop_index("ix_tool_website", table_name="tool")
    op.drop_index("ix_tool_name", table_name="tool")
    op.drop_table("tool")
    op.drop_table("category")
