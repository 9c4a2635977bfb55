"""Initial schema — districts, taluks, donors.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "districts",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("name_key", sa.String(120), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("name_key", name="uq_districts_name_key"),
    )

    op.create_table(
        "taluks",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("name_key", sa.String(120), nullable=False),
        sa.Column("district_id", sa.Integer, sa.ForeignKey("districts.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("name_key", "district_id", name="uq_taluks_name_key_district"),
    )
    op.create_index("ix_taluks_district_id", "taluks", ["district_id"])

    op.create_table(
        "donors",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(254), nullable=True),
        sa.Column("contact_number", sa.String(32), nullable=False),
        sa.Column("blood_group", sa.String(10), nullable=False),
        sa.Column("weight", sa.Integer, nullable=True),
        sa.Column("date_of_birth", sa.String(32), nullable=True),
        sa.Column("batch", sa.String(64), nullable=True),
        sa.Column("district", sa.String(120), nullable=False),
        sa.Column("taluk", sa.String(120), nullable=False),
        sa.Column("village_municipality_corporation", sa.String(200), nullable=True),
        sa.Column("last_donated", sa.Date, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    for column in ("blood_group", "district", "taluk", "name", "last_donated"):
        op.create_index(f"ix_donors_{column}", "donors", [column])


def downgrade() -> None:
    op.drop_table("donors")
    op.drop_table("taluks")
    op.drop_table("districts")
