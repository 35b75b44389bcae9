"""Create village schema

Revision ID: 001
Revises: None
Create Date: 2026-10-17 00:00:00.000000+00:00

What:  Creates users, announcements, suggestions, queries, places, crops,
       prices and counters, with their unique constraints, and seeds one
       counter row (value 0) per id sequence.

Rollback: downgrade() drops every table (destructive — all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SEQUENCES = ("users", "announcements", "suggestions", "queries", "price", "crop")


def upgrade() -> None:
    counters = op.create_table(
        "counters",
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column("sequence_value", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("name"),
    )

    op.create_table(
        "users",
        sa.Column("pk", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(150), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("address", sa.String(500), nullable=True),
        sa.Column("job_title", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("activation", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("user_type", sa.String(20), nullable=False, server_default=sa.text("'user'")),
        sa.PrimaryKeyConstraint("pk"),
        sa.UniqueConstraint("id"),
        sa.UniqueConstraint("username"),
    )

    op.create_table(
        "announcements",
        sa.Column("pk", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("pk"),
        sa.UniqueConstraint("id"),
    )
    op.create_index(
        "idx_announcements_created_at",
        "announcements",
        [sa.text("created_at DESC")],
    )

    op.create_table(
        "suggestions",
        sa.Column("pk", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("username", sa.String(150), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("response", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("pk"),
        sa.UniqueConstraint("id"),
    )

    op.create_table(
        "queries",
        sa.Column("pk", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(150), nullable=True),
        sa.Column("matter", sa.Text(), nullable=True),
        sa.Column("time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("admin_response", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("pk"),
        sa.UniqueConstraint("id"),
    )
    op.create_index("idx_queries_username_time", "queries", ["username", "time"])

    op.create_table(
        "places",
        sa.Column("pk", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("place_name", sa.String(255), nullable=True),
        sa.PrimaryKeyConstraint("pk"),
        sa.UniqueConstraint("id"),
    )

    op.create_table(
        "crops",
        sa.Column("pk", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("crop_name", sa.String(255), nullable=False),
        sa.Column("avg_price", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("pk"),
        sa.UniqueConstraint("id"),
        sa.UniqueConstraint("crop_name"),
    )

    op.create_table(
        "prices",
        sa.Column("pk", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("place_id", sa.Integer(), nullable=False),
        sa.Column("crop_id", sa.Integer(), nullable=False),
        sa.Column("price", sa.JSON(), nullable=True),
        sa.Column("month_year", sa.String(20), nullable=True),
        sa.PrimaryKeyConstraint("pk"),
        sa.UniqueConstraint("id"),
        sa.UniqueConstraint("place_id", "crop_id", name="uq_prices_place_crop"),
    )
    op.create_index("ix_prices_place_id", "prices", ["place_id"])

    # Counters must exist before the first create; the API never adds them
    op.bulk_insert(counters, [{"name": name, "sequence_value": 0} for name in SEQUENCES])


def downgrade() -> None:
    """Drop every table. Destructive — all data is lost."""
    op.drop_index("ix_prices_place_id", table_name="prices")
    op.drop_table("prices")
    op.drop_table("crops")
    op.drop_table("places")
    op.drop_index("idx_queries_username_time", table_name="queries")
    op.drop_table("queries")
    op.drop_table("suggestions")
    op.drop_index("idx_announcements_created_at", table_name="announcements")
    op.drop_table("announcements")
    op.drop_table("users")
    op.drop_table("counters")
