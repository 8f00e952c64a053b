from sqlalchemy import (
    Column,
    String,
    Text,
    Boolean,
    Integer,
    Numeric,
    DateTime,
    ForeignKey,
    Index,
    CheckConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import UUID, ARRAY

from tourism_directory.utils import utcnow, uuid4_str

from .session import Base


class Profile(Base):
    """Account row owned by the hosted auth backend; id is the auth user id."""
    __tablename__ = "profiles"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    email = Column(String(255), nullable=True, index=True)
    full_name = Column(String(255), nullable=True)
    user_role = Column(String(50), nullable=True)  # tourist, tour_guide, hotel_partner, admin
    created_at = Column(DateTime(timezone=True), server_default=func.now(), default=utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)


class Tourist(Base):
    __tablename__ = "tourists"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    user_id = Column(UUID(as_uuid=False), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, unique=True)
    full_name = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)
    travel_preferences = Column(ARRAY(String), default=list)
    preferred_language = Column(String(20), default="en")
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), default=utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)


class TourGuide(Base):
    __tablename__ = "tour_guides"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    user_id = Column(UUID(as_uuid=False), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, unique=True)

    full_name = Column(String(255), nullable=True)
    company_name = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    website = Column(String(500), nullable=True)
    bio = Column(Text, nullable=True)
    license_number = Column(String(100), nullable=True)

    address = Column(Text, nullable=True)
    city = Column(String(255), nullable=True)
    state = Column(String(255), nullable=True)
    pincode = Column(String(20), nullable=True)

    specialties = Column(ARRAY(String), default=list)
    languages_spoken = Column(ARRAY(String), default=list)
    certifications = Column(ARRAY(String), default=list)
    experience_years = Column(Integer, nullable=True)
    hourly_rate = Column(Numeric(10, 2), nullable=True)

    verified = Column(Boolean, default=False, nullable=False)  # admin-only
    is_active = Column(Boolean, default=True, nullable=False)
    last_active = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), default=utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    __table_args__ = (
        Index("ix_tour_guides_city", "city"),
        Index("ix_tour_guides_state", "state"),
    )


class HotelPartner(Base):
    __tablename__ = "hotel_partners"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    user_id = Column(UUID(as_uuid=False), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, unique=True)

    full_name = Column(String(255), nullable=True)
    company_name = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    website = Column(String(500), nullable=True)
    bio = Column(Text, nullable=True)
    license_number = Column(String(100), nullable=True)

    address = Column(Text, nullable=True)
    city = Column(String(255), nullable=True)
    state = Column(String(255), nullable=True)
    pincode = Column(String(20), nullable=True)

    hotel_type = Column(String(100), nullable=True)
    amenities = Column(ARRAY(String), default=list)
    room_types = Column(ARRAY(String), default=list)
    images = Column(ARRAY(String), default=list)
    price_min = Column(Numeric(12, 2), nullable=True)  # per night
    price_max = Column(Numeric(12, 2), nullable=True)

    is_verified = Column(Boolean, default=False, nullable=False)  # admin-only
    is_active = Column(Boolean, default=True, nullable=False)
    last_active = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), default=utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    __table_args__ = (
        Index("ix_hotel_partners_city", "city"),
        Index("ix_hotel_partners_state", "state"),
    )


class UserPassion(Base):
    __tablename__ = "user_passions"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    user_id = Column(UUID(as_uuid=False), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    passion = Column(String(50), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), default=utcnow)

    __table_args__ = (Index("ix_user_passions_user_passion", "user_id", "passion", unique=True),)


class DirectoryListing(Base):
    __tablename__ = "public_directory_listings"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    user_id = Column(UUID(as_uuid=False), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    passion_type = Column(String(50), nullable=False)
    is_visible = Column(Boolean, default=True, nullable=False)
    is_featured = Column(Boolean, default=False, nullable=False)
    listing_priority = Column(Integer, default=0, nullable=False)
    search_keywords = Column(ARRAY(String), default=list)
    last_updated = Column(DateTime(timezone=True), server_default=func.now(), default=utcnow)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), default=utcnow)

    __table_args__ = (
        CheckConstraint("passion_type IN ('tour_guide', 'hotel_partner')", name="ck_listing_passion_type"),
        Index("ix_listing_user_passion", "user_id", "passion_type", unique=True),
        Index("ix_listing_visible_passion", "is_visible", "passion_type"),
        Index("ix_listing_priority", "listing_priority"),
    )


class VisibilityPreferences(Base):
    __tablename__ = "user_visibility_preferences"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    user_id = Column(UUID(as_uuid=False), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, unique=True)
    show_contact_info = Column(Boolean, default=True, nullable=False)
    show_pricing = Column(Boolean, default=True, nullable=False)
    show_location = Column(Boolean, default=True, nullable=False)
    show_reviews = Column(Boolean, default=True, nullable=False)
    custom_bio = Column(Text, nullable=True)
    featured_images = Column(ARRAY(String), default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), default=utcnow)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), default=utcnow)
