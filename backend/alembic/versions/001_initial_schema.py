"""Initial schema: accounts, organizers, venues, events, registrations, providers,
sponsors, reviews, messages and password reset tokens.

Revision ID: 001
Revises: None
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSON_LIST = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _id() -> sa.Column:
    return sa.Column("id", sa.String(64), primary_key=True)


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())


def _updated_at() -> sa.Column:
    return sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())


def upgrade() -> None:
    # Users table
    op.create_table(
        "users",
        _id(),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("username", sa.String(30), nullable=True, unique=True),
        sa.Column("password", sa.String(255), nullable=True),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("profile_image_url", sa.String(1024), nullable=True),
        sa.Column("role", sa.String(32), nullable=False, server_default="attendee"),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("token_version", sa.Integer(), nullable=False, server_default="1"),
        _created_at(),
        _updated_at(),
        sa.CheckConstraint(
            "role IN ('admin', 'attendee', 'organizer', 'venue', 'service_provider', 'sponsor')",
            name="check_user_role",
        ),
    )

    # Organizer business profiles
    op.create_table(
        "organizers",
        _id(),
        sa.Column("user_id", sa.String(64), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True, unique=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("business_name", sa.String(255), nullable=False),
        sa.Column("business_description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("specialties", JSON_LIST, nullable=True),
        sa.Column("years_experience", sa.Integer(), nullable=True),
        sa.Column("price_range", sa.String(100), nullable=True),
        sa.Column("portfolio_links", JSON_LIST, nullable=True),
        sa.Column("profile_image_url", sa.String(1024), nullable=True),
        sa.Column("rating", sa.Numeric(3, 2), nullable=False, server_default="0"),
        sa.Column("review_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_events_organized", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("featured", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        _created_at(),
        _updated_at(),
    )
    op.create_index("ix_organizers_featured_verified", "organizers", ["featured", "verified"])
    op.create_index("ix_organizers_city", "organizers", ["city"])

    # Venues
    op.create_table(
        "venues",
        _id(),
        sa.Column("user_id", sa.String(64), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("name_ar", sa.String(255), nullable=True),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("location", sa.String(500), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=True),
        sa.Column("venue_type", sa.String(100), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(1024), nullable=True),
        sa.Column("image_urls", JSON_LIST, nullable=True),
        sa.Column("amenities", JSON_LIST, nullable=True),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        _created_at(),
        _updated_at(),
    )
    op.create_index("ix_venues_user_id", "venues", ["user_id"])
    op.create_index("venues_name_city_location_idx", "venues", ["name", "city", "location"])

    # Sponsors
    op.create_table(
        "sponsors",
        _id(),
        sa.Column("user_id", sa.String(64), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("name_ar", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("logo_url", sa.String(1024), nullable=True),
        sa.Column("website", sa.String(1024), nullable=True),
        sa.Column("contact_email", sa.String(255), nullable=True),
        sa.Column("contact_phone", sa.String(50), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        _created_at(),
        _updated_at(),
    )
    op.create_index("ix_sponsors_user_id", "sponsors", ["user_id"])

    # Service providers (one per account)
    op.create_table(
        "service_providers",
        _id(),
        sa.Column("user_id", sa.String(64), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True),
        sa.Column("business_name", sa.String(255), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("services", JSON_LIST, nullable=True),
        sa.Column("price_range", sa.String(100), nullable=True),
        sa.Column("portfolio", JSON_LIST, nullable=True),
        sa.Column("availability", JSON_LIST, nullable=True),
        sa.Column("rating", sa.Numeric(3, 2), nullable=False, server_default="0"),
        sa.Column("review_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        _created_at(),
        _updated_at(),
        sa.CheckConstraint("rating >= 0 AND rating <= 5", name="check_provider_rating_range"),
    )
    op.create_index("ix_service_providers_category", "service_providers", ["category"])
    op.create_index("ix_service_providers_rating", "service_providers", ["rating"])

    # Events table
    op.create_table(
        "events",
        _id(),
        sa.Column("organizer_id", sa.String(64), sa.ForeignKey("organizers.id", ondelete="CASCADE"), nullable=False),
        sa.Column("venue_id", sa.String(64), sa.ForeignKey("venues.id", ondelete="SET NULL"), nullable=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("title_ar", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("description_ar", sa.Text(), nullable=True),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("location", sa.String(500), nullable=False),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("venue", sa.String(255), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("currency", sa.String(10), nullable=False, server_default="SAR"),
        sa.Column("max_attendees", sa.Integer(), nullable=True),
        sa.Column("image_url", sa.String(1024), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("tags", JSON_LIST, nullable=True),
        sa.Column("sponsor1_id", sa.String(64), sa.ForeignKey("sponsors.id", ondelete="SET NULL"), nullable=True),
        sa.Column("sponsor2_id", sa.String(64), sa.ForeignKey("sponsors.id", ondelete="SET NULL"), nullable=True),
        sa.Column("sponsor3_id", sa.String(64), sa.ForeignKey("sponsors.id", ondelete="SET NULL"), nullable=True),
        sa.Column(
            "service_provider1_id", sa.String(64),
            sa.ForeignKey("service_providers.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column(
            "service_provider2_id", sa.String(64),
            sa.ForeignKey("service_providers.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column(
            "service_provider3_id", sa.String(64),
            sa.ForeignKey("service_providers.id", ondelete="SET NULL"), nullable=True,
        ),
        _created_at(),
        _updated_at(),
        sa.CheckConstraint("price >= 0", name="check_event_price_non_negative"),
        sa.CheckConstraint("max_attendees IS NULL OR max_attendees > 0", name="check_event_max_attendees_positive"),
        sa.CheckConstraint(
            "status IN ('draft', 'published', 'cancelled', 'completed')",
            name="check_event_status",
        ),
    )
    op.create_index("events_venue_id_idx", "events", ["venue_id"])
    op.create_index("ix_events_organizer_id", "events", ["organizer_id"])
    op.create_index("ix_events_status_start_date", "events", ["status", "start_date"])

    # Event registrations (tickets)
    op.create_table(
        "event_registrations",
        _id(),
        sa.Column("event_id", sa.String(64), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
        sa.Column("attendee_id", sa.String(64), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="registered"),
        sa.Column("ticket_code", sa.String(32), nullable=False, unique=True),
        sa.Column("registered_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("status IN ('registered', 'cancelled', 'attended')", name="check_registration_status"),
    )
    op.create_index("ix_event_registrations_event_attendee", "event_registrations", ["event_id", "attendee_id"])
    op.create_index("ix_event_registrations_attendee_id", "event_registrations", ["attendee_id"])

    # Event <-> sponsor join table
    op.create_table(
        "event_sponsors",
        _id(),
        sa.Column("event_id", sa.String(64), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
        sa.Column("sponsor_id", sa.String(64), sa.ForeignKey("sponsors.id", ondelete="CASCADE"), nullable=False),
        sa.Column("tier", sa.String(20), nullable=False, server_default="partner"),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        _created_at(),
        sa.UniqueConstraint("event_id", "sponsor_id", name="uq_event_sponsor"),
        sa.CheckConstraint(
            "tier IN ('platinum', 'gold', 'silver', 'bronze', 'partner')",
            name="check_event_sponsor_tier",
        ),
    )
    op.create_index("ix_event_sponsors_event_order", "event_sponsors", ["event_id", "display_order"])

    # Service bookings
    op.create_table(
        "service_bookings",
        _id(),
        sa.Column("event_id", sa.String(64), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "service_provider_id", sa.String(64),
            sa.ForeignKey("service_providers.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("organizer_id", sa.String(64), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("total_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        _created_at(),
        _updated_at(),
        sa.CheckConstraint("total_amount >= 0", name="check_booking_amount_non_negative"),
        sa.CheckConstraint(
            "status IN ('pending', 'confirmed', 'completed', 'cancelled')",
            name="check_service_booking_status",
        ),
    )
    op.create_index("ix_service_bookings_event_id", "service_bookings", ["event_id"])
    op.create_index("ix_service_bookings_provider_id", "service_bookings", ["service_provider_id"])
    op.create_index("ix_service_bookings_organizer_id", "service_bookings", ["organizer_id"])

    # Reviews (polymorphic target)
    op.create_table(
        "reviews",
        _id(),
        sa.Column("reviewer_id", sa.String(64), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("target_type", sa.String(32), nullable=False),
        sa.Column("target_id", sa.String(64), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        _created_at(),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="check_review_rating_range"),
        sa.CheckConstraint("target_type IN ('event', 'service_provider')", name="check_review_target_type"),
    )
    op.create_index("ix_reviews_target", "reviews", ["target_type", "target_id"])

    # Direct messages
    op.create_table(
        "messages",
        _id(),
        sa.Column("sender_id", sa.String(64), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("receiver_id", sa.String(64), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        _created_at(),
    )
    op.create_index("ix_messages_sender_created", "messages", ["sender_id", "created_at"])
    op.create_index("ix_messages_receiver_created", "messages", ["receiver_id", "created_at"])

    # Password reset tokens (hash only)
    op.create_table(
        "password_reset_tokens",
        _id(),
        sa.Column("user_id", sa.String(64), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("token_hash", sa.String(128), nullable=False, unique=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
    )
    op.create_index("ix_password_reset_tokens_user_id", "password_reset_tokens", ["user_id"])


def downgrade() -> None:
    op.drop_table("password_reset_tokens")
    op.drop_table("messages")
    op.drop_table("reviews")
    op.drop_table("service_bookings")
    op.drop_table("event_sponsors")
    op.drop_table("event_registrations")
    op.drop_table("events")
    op.drop_table("service_providers")
    op.drop_table("sponsors")
    op.drop_table("venues")
    op.drop_table("organizers")
    op.drop_table("users")
