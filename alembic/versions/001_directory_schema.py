"""Directory schema: profiles, role tables, passions, listings, visibility preferences.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _provider_columns() -> list:
    """Columns shared by tour_guides and hotel_partners."""
    return [
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "user_id",
            sa.UUID(),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("full_name", sa.String(255), nullable=True),
        sa.Column("company_name", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("website", sa.String(500), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("license_number", sa.String(100), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("city", sa.String(255), nullable=True),
        sa.Column("state", sa.String(255), nullable=True),
        sa.Column("pincode", sa.String(20), nullable=True),
    ]


def _tail_columns() -> list:
    return [
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("last_active", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("full_name", sa.String(255), nullable=True),
        sa.Column("user_role", sa.String(50), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_profiles_email", "profiles", ["email"])

    op.create_table(
        "tourists",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "user_id",
            sa.UUID(),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("full_name", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("travel_preferences", sa.ARRAY(sa.String()), nullable=True),
        sa.Column("preferred_language", sa.String(20), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "tour_guides",
        *_provider_columns(),
        sa.Column("specialties", sa.ARRAY(sa.String()), nullable=True),
        sa.Column("languages_spoken", sa.ARRAY(sa.String()), nullable=True),
        sa.Column("certifications", sa.ARRAY(sa.String()), nullable=True),
        sa.Column("experience_years", sa.Integer(), nullable=True),
        sa.Column("hourly_rate", sa.Numeric(10, 2), nullable=True),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_tail_columns(),
    )
    op.create_index("ix_tour_guides_city", "tour_guides", ["city"])
    op.create_index("ix_tour_guides_state", "tour_guides", ["state"])

    op.create_table(
        "hotel_partners",
        *_provider_columns(),
        sa.Column("hotel_type", sa.String(100), nullable=True),
        sa.Column("amenities", sa.ARRAY(sa.String()), nullable=True),
        sa.Column("room_types", sa.ARRAY(sa.String()), nullable=True),
        sa.Column("images", sa.ARRAY(sa.String()), nullable=True),
        sa.Column("price_min", sa.Numeric(12, 2), nullable=True),
        sa.Column("price_max", sa.Numeric(12, 2), nullable=True),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_tail_columns(),
    )
    op.create_index("ix_hotel_partners_city", "hotel_partners", ["city"])
    op.create_index("ix_hotel_partners_state", "hotel_partners", ["state"])

    op.create_table(
        "user_passions",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("user_id", sa.UUID(), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("passion", sa.String(50), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )
    op.create_index("ix_user_passions_user_passion", "user_passions", ["user_id", "passion"], unique=True)

    op.create_table(
        "public_directory_listings",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("user_id", sa.UUID(), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("passion_type", sa.String(50), nullable=False),
        sa.Column("is_visible", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("listing_priority", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("search_keywords", sa.ARRAY(sa.String()), nullable=True),
        sa.Column("last_updated", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.CheckConstraint(
            "passion_type IN ('tour_guide', 'hotel_partner')",
            name="ck_listing_passion_type",
        ),
    )
    op.create_index(
        "ix_listing_user_passion",
        "public_directory_listings",
        ["user_id", "passion_type"],
        unique=True,
    )
    op.create_index("ix_listing_visible_passion", "public_directory_listings", ["is_visible", "passion_type"])
    op.create_index("ix_listing_priority", "public_directory_listings", ["listing_priority"])

    op.create_table(
        "user_visibility_preferences",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "user_id",
            sa.UUID(),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("show_contact_info", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("show_pricing", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("show_location", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("show_reviews", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("custom_bio", sa.Text(), nullable=True),
        sa.Column("featured_images", sa.ARRAY(sa.String()), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )


def downgrade() -> None:
    op.drop_table("user_visibility_preferences")
    op.drop_table("public_directory_listings")
    op.drop_table("user_passions")
    op.drop_table("hotel_partners")
    op.drop_table("tour_guides")
    op.drop_table("tourists")
    op.drop_table("profiles")
