"""initial booking platform schema

Revision ID: 0001_dashboard
Revises:
Create Date: 2026-10-17
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "0001_dashboard"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "vendor_profiles",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("business_name", sa.String(), nullable=False),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column("phone_number", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_vendor_profiles_business_name", "vendor_profiles", ["business_name"])

    op.create_table(
        "services",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_visible_to_users", sa.Boolean(), nullable=True),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column("media_urls", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("vendor_id", sa.String(), sa.ForeignKey("vendor_profiles.id"), nullable=True),
        sa.Column("is_featured", sa.Boolean(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_services_vendor_id", "services", ["vendor_id"])
    op.create_index("ix_services_created_at", "services", ["created_at"])

    op.create_table(
        "bookings",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("booking_date", sa.Date(), nullable=True),
        sa.Column("booking_time", sa.Time(), nullable=True),
        sa.Column("status", sa.String(), nullable=True),
        sa.Column("amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("service_id", sa.String(), sa.ForeignKey("services.id"), nullable=True),
        sa.Column("vendor_id", sa.String(), sa.ForeignKey("vendor_profiles.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_bookings_service_id", "bookings", ["service_id"])
    op.create_index("ix_bookings_vendor_id", "bookings", ["vendor_id"])
    # Dashboard window reads newest-first.
    op.create_index("ix_bookings_created_at", "bookings", [sa.text("created_at DESC")])

    op.create_table(
        "user_profiles",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("first_name", sa.String(), nullable=True),
        sa.Column("last_name", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_user_profiles_created_at", "user_profiles", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_user_profiles_created_at", table_name="user_profiles")
    op.drop_table("user_profiles")
    op.drop_index("ix_bookings_created_at", table_name="bookings")
    op.drop_index("ix_bookings_vendor_id", table_name="bookings")
    op.drop_index("ix_bookings_service_id", table_name="bookings")
    op.drop_table("bookings")
    op.drop_index("ix_services_created_at", table_name="services")
    op.drop_index("ix_services_vendor_id", table_name="services")
    op.drop_table("services")
    op.drop_index("ix_vendor_profiles_business_name", table_name="vendor_profiles")
    op.drop_table("vendor_profiles")
