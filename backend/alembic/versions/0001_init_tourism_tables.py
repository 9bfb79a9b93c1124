"""init tourism tables

Revision ID: 0001_init_tourism_tables
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_init_tourism_tables"
down_revision = None
branch_labels = None
depends_on = None

FEATURES = "tourism_features"
ENTITIES = "tourism_entities"


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("CURRENT_TIMESTAMP"),
    )


def upgrade() -> None:
    op.execute(f"CREATE SCHEMA IF NOT EXISTS {FEATURES}")
    op.execute(f"CREATE SCHEMA IF NOT EXISTS {ENTITIES}")

    op.create_table(
        "profiles",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("username", sa.String(length=120), nullable=True),
        sa.Column("full_name", sa.String(length=255), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("avatar_url", sa.String(length=512), nullable=True),
        sa.Column(
            "is_first_time_user",
            sa.Boolean(),
            nullable=False,
            server_default=sa.true(),
        ),
        _timestamp("created_at"),
    )

    op.create_table(
        "prompts_count",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.UniqueConstraint("user_id"),
    )

    op.create_table(
        "tourism_onboarding",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("session_id", sa.String(length=64), nullable=True),
        sa.Column("country", sa.String(length=120), nullable=False),
        sa.Column("budget", sa.String(length=120), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("want_reminder", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("stay_option", sa.Text(), nullable=True),
        sa.Column("interests", sa.JSON(), nullable=False),
        sa.Column("want_bucket_list", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("selected_activities", sa.JSON(), nullable=False),
        sa.Column("stay_listing_id", sa.String(length=64), nullable=True),
        sa.Column(
            "has_completed_onboarding",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        schema=FEATURES,
    )
    op.create_index(
        "ix_tourism_onboarding_user_id",
        "tourism_onboarding",
        ["user_id"],
        schema=FEATURES,
    )

    op.create_table(
        "accommodationprovider_listings",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("entity_id", sa.String(length=64), nullable=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("price_per_night", sa.Float(), nullable=True),
        _timestamp("created_at"),
        schema=ENTITIES,
    )

    op.create_table(
        "activitiesprovider_activities",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("entity_id", sa.String(length=64), nullable=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("price", sa.Float(), nullable=True),
        sa.Column("duration_minutes", sa.Integer(), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _timestamp("created_at"),
        schema=ENTITIES,
    )

    op.create_table(
        "accommodationprovider_bookings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("listing_id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=True),
        sa.Column("guest_name", sa.String(length=255), nullable=False),
        sa.Column("check_in", sa.Date(), nullable=False),
        sa.Column("check_out", sa.Date(), nullable=False),
        sa.Column(
            "status",
            sa.String(length=20),
            nullable=False,
            server_default=sa.text("'pending'"),
        ),
        _timestamp("created_at"),
        schema=ENTITIES,
    )
    op.create_index(
        "ix_accommodationprovider_bookings_listing_id",
        "accommodationprovider_bookings",
        ["listing_id"],
        schema=ENTITIES,
    )

    op.create_table(
        "activitiesprovider_bookings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("activity_id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=True),
        sa.Column("guest_name", sa.String(length=255), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.String(length=5), nullable=False),
        sa.Column("pax", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column(
            "status",
            sa.String(length=20),
            nullable=False,
            server_default=sa.text("'pending'"),
        ),
        _timestamp("created_at"),
        schema=ENTITIES,
    )
    op.create_index(
        "ix_activitiesprovider_bookings_activity_id",
        "activitiesprovider_bookings",
        ["activity_id"],
        schema=ENTITIES,
    )


def downgrade() -> None:
    op.drop_table("activitiesprovider_bookings", schema=ENTITIES)
    op.drop_table("accommodationprovider_bookings", schema=ENTITIES)
    op.drop_table("activitiesprovider_activities", schema=ENTITIES)
    op.drop_table("accommodationprovider_listings", schema=ENTITIES)
    op.drop_table("tourism_onboarding", schema=FEATURES)
    op.drop_table("prompts_count")
    op.drop_table("profiles")
