"""init schema

Revision ID: 0001_init_schema
Revises:
Create Date: 2026-10-19
"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa


revision: str = "0001_init_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("login", sa.String(length=128), nullable=False),
        sa.Column("password_hash", sa.String(length=512), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_login", "users", ["login"], unique=True)

    op.create_table(
        "subjects",
        sa.Column("code", sa.String(length=10), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("owner_id", sa.String(length=36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("code"),
    )
    op.create_index("ix_subjects_owner_id", "subjects", ["owner_id"], unique=False)

    op.create_table(
        "qualifications",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("subject_code", sa.String(length=10), nullable=False),
        sa.Column("cort", sa.Integer(), nullable=False),
        sa.Column("total", sa.Numeric(precision=12, scale=4), nullable=False, server_default="0"),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.CheckConstraint("cort >= 1 AND cort <= 3", name="ck_qualifications_cort_range"),
        sa.ForeignKeyConstraint(["subject_code"], ["subjects.code"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("subject_code", "cort", name="uq_qualifications_subject_cort"),
    )
    op.create_index("ix_qualifications_subject_code", "qualifications", ["subject_code"], unique=False)

    op.create_table(
        "activities",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("qualification_id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("percent", sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column("score", sa.Numeric(precision=6, scale=2), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("percent >= 0", name="ck_activities_percent_non_negative"),
        sa.ForeignKeyConstraint(["qualification_id"], ["qualifications.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_activities_qualification_id", "activities", ["qualification_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_activities_qualification_id", table_name="activities")
    op.drop_table("activities")

    op.drop_index("ix_qualifications_subject_code", table_name="qualifications")
    op.drop_table("qualifications")

    op.drop_index("ix_subjects_owner_id", table_name="subjects")
    op.drop_table("subjects")

    op.drop_index("ix_users_login", table_name="users")
    op.drop_table("users")
