import enum

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from .database import Base
from .shared.dates import utcnow


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    CUSTOMER = "customer"
    SALON_OWNER = "salon_owner"
    GUEST = "guest"


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    PREFER_NOT_TO_SAY = "prefer_not_to_say"


class CustomerTier(str, enum.Enum):
    FREE = "free"
    PLUS = "plus"
    PRO = "pro"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash, never serialized
    role = Column(String(20), default=UserRole.CUSTOMER.value, nullable=False)
    phone = Column(String(20), nullable=True)
    gender = Column(String(20), nullable=True)
    profile_image = Column(String(500), nullable=True)
    date_of_birth = Column(Date, nullable=True)
    address = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    preferred_language = Column(String(10), default="en", nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    is_email_verified = Column(Boolean, default=False, nullable=False)
    is_phone_verified = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    customer_profile = relationship(
        "CustomerProfile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    salon = relationship("Salon", back_populates="owner", uselist=False)


class CustomerProfile(Base):
    __tablename__ = "customer_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False, index=True)
    subscription_tier = Column(String(10), default=CustomerTier.FREE.value, nullable=False)
    try_on_credits = Column(Integer, default=0, nullable=False)  # Balance for plus/pro tiers
    weekly_try_ons_used = Column(Integer, default=0, nullable=False)  # Free tier counter
    weekly_reset_date = Column(DateTime, nullable=True)  # End of the current free-tier window
    subscription_start_date = Column(DateTime, nullable=True)
    subscription_end_date = Column(DateTime, nullable=True)
    auto_renew = Column(Boolean, default=False, nullable=False)
    preferences = Column(JSON, nullable=True)  # favoriteStyles, hairType, notification opts
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="customer_profile")
