import enum

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from .database import Base
from .shared.dates import utcnow


class GenderSpecialization(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"
    UNISEX = "unisex"


class SalonTier(str, enum.Enum):
    STARTER = "starter"
    GROWTH = "growth"
    PRO = "pro"


class VerificationStatus(str, enum.Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class ServiceCategory(str, enum.Enum):
    HAIRCUT = "haircut"
    HAIR_COLOR = "hair_color"
    HAIR_TREATMENT = "hair_treatment"
    STYLING = "styling"
    BRIDAL = "bridal"
    BEARD = "beard"
    FACIAL = "facial"
    MASSAGE = "massage"
    MANICURE_PEDICURE = "manicure_pedicure"
    MAKEUP = "makeup"
    OTHER = "other"


class StaffRole(str, enum.Enum):
    OWNER = "owner"
    MANAGER = "manager"
    SENIOR_STYLIST = "senior_stylist"
    STYLIST = "stylist"
    JUNIOR_STYLIST = "junior_stylist"
    BARBER = "barber"
    COLORIST = "colorist"
    BEAUTICIAN = "beautician"
    RECEPTIONIST = "receptionist"


class Salon(Base):
    __tablename__ = "salons"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False, index=True)
    business_name = Column(String(255), nullable=False)
    slug = Column(String(300), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    phone = Column(String(20), nullable=False)
    email = Column(String(255), nullable=True)
    address = Column(Text, nullable=False)
    city = Column(String(100), nullable=False, index=True)
    district = Column(String(100), nullable=True)
    province = Column(String(100), nullable=True)
    postal_code = Column(String(10), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    gender_specialization = Column(String(10), default=GenderSpecialization.UNISEX.value, nullable=False)
    languages_spoken = Column(JSON, nullable=True)
    # {"monday": {"open": "09:00", "close": "18:00", "closed": false}, ...}
    working_hours = Column(JSON, nullable=True)
    images = Column(JSON, nullable=True)
    cover_image = Column(String(500), nullable=True)
    logo_image = Column(String(500), nullable=True)
    subscription_tier = Column(String(10), default=SalonTier.STARTER.value, nullable=False)
    subscription_start_date = Column(DateTime, nullable=True)
    subscription_end_date = Column(DateTime, nullable=True)
    verification_status = Column(String(10), default=VerificationStatus.PENDING.value, nullable=False)
    verification_notes = Column(Text, nullable=True)
    business_registration_number = Column(String(100), nullable=True)
    average_rating = Column(Float, default=0, nullable=False)  # Derived from visible reviews
    total_reviews = Column(Integer, default=0, nullable=False)
    accepts_walk_ins = Column(Boolean, default=True, nullable=False)
    accepts_online_bookings = Column(Boolean, default=True, nullable=False)
    featured_listing_credits = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    view_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    owner = relationship("User", back_populates="salon")
    services = relationship("Service", back_populates="salon", cascade="all, delete-orphan")
    staff = relationship("Staff", back_populates="salon", cascade="all, delete-orphan")


class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    salon_id = Column(Integer, ForeignKey("salons.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(30), nullable=False)
    gender = Column(String(10), default=GenderSpecialization.UNISEX.value, nullable=False)
    price = Column(Float, nullable=False)
    discounted_price = Column(Float, nullable=True)
    duration_minutes = Column(Integer, nullable=False)
    image = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    is_popular = Column(Boolean, default=False, nullable=False)
    booking_count = Column(Integer, default=0, nullable=False)
    add_ons = Column(JSON, nullable=True)
    add_on_prices = Column(JSON, nullable=True)  # {"addOnName": price}
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    salon = relationship("Salon", back_populates="services")


class Staff(Base):
    __tablename__ = "staff"

    id = Column(Integer, primary_key=True, index=True)
    salon_id = Column(Integer, ForeignKey("salons.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(20), nullable=True)
    role = Column(String(20), default=StaffRole.STYLIST.value, nullable=False)
    bio = Column(Text, nullable=True)
    profile_image = Column(String(500), nullable=True)
    specializations = Column(JSON, nullable=True)
    years_of_experience = Column(Integer, default=0, nullable=False)
    languages_spoken = Column(JSON, nullable=True)
    working_hours = Column(JSON, nullable=True)
    rating = Column(Float, default=0, nullable=False)
    total_reviews = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    accepts_bookings = Column(Boolean, default=True, nullable=False)
    completed_bookings = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    salon = relationship("Salon", back_populates="staff")
