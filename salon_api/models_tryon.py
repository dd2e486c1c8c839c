import enum

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from .database import Base
from .shared.dates import utcnow


class HairstyleCategory(str, enum.Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"
    CURLY = "curly"
    STRAIGHT = "straight"
    WAVY = "wavy"
    BRAIDED = "braided"
    UPDO = "updo"
    PONYTAIL = "ponytail"
    BANGS = "bangs"
    LAYERED = "layered"
    BOB = "bob"
    PIXIE = "pixie"
    BUZZ_CUT = "buzz_cut"
    FADE = "fade"
    UNDERCUT = "undercut"
    BRIDAL = "bridal"
    FORMAL = "formal"
    CASUAL = "casual"


class HairstyleGender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"
    UNISEX = "unisex"


class TryOnStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class Hairstyle(Base):
    __tablename__ = "hairstyles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=False)
    thumbnail_url = Column(String(500), nullable=True)
    category = Column(String(20), nullable=False, index=True)
    gender = Column(String(10), default=HairstyleGender.UNISEX.value, nullable=False)
    tags = Column(JSON, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    is_featured = Column(Boolean, default=False, nullable=False)
    is_premium = Column(Boolean, default=False, nullable=False)
    try_on_count = Column(Integer, default=0, nullable=False)
    save_count = Column(Integer, default=0, nullable=False)
    style_pack = Column(String(100), nullable=True)  # Seasonal or themed collection
    sort_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class TryOnSession(Base):
    __tablename__ = "try_on_sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    original_image_url = Column(String(500), nullable=False)
    result_image_url = Column(String(500), nullable=True)
    hairstyle_id = Column(Integer, ForeignKey("hairstyles.id"), nullable=False)
    hairstyle_name = Column(String(255), nullable=True)
    status = Column(String(20), default=TryOnStatus.PENDING.value, nullable=False)
    error_message = Column(Text, nullable=True)
    processing_time_ms = Column(Integer, nullable=True)
    is_saved = Column(Boolean, default=False, nullable=False)
    is_shared = Column(Boolean, default=False, nullable=False)
    share_token = Column(String(64), unique=True, index=True, nullable=True)
    generation_metadata = Column(JSON, nullable=True)  # {model, cost, batchProcessed}
    view_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User")
    hairstyle = relationship("Hairstyle")
