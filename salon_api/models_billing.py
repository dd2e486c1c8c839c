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


class PaymentType(str, enum.Enum):
    BOOKING = "booking"
    SUBSCRIPTION = "subscription"
    CREDITS = "credits"


class PaymentMethod(str, enum.Enum):
    CARD = "card"
    BANK_TRANSFER = "bank_transfer"
    LANKAQR = "lankaqr"
    CASH = "cash"


class PaymentRecordStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"
    CANCELLED = "cancelled"


class SubscriptionType(str, enum.Enum):
    CUSTOMER_FREE = "customer_free"
    CUSTOMER_PLUS = "customer_plus"
    CUSTOMER_PRO = "customer_pro"
    SALON_STARTER = "salon_starter"
    SALON_GROWTH = "salon_growth"
    SALON_PRO = "salon_pro"


class SubscriptionStatus(str, enum.Enum):
    ACTIVE = "active"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
    SUSPENDED = "suspended"
    TRIAL = "trial"


class BillingCycle(str, enum.Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"


class PromotionType(str, enum.Enum):
    PERCENTAGE_DISCOUNT = "percentage_discount"
    FIXED_DISCOUNT = "fixed_discount"
    FEATURED_LISTING = "featured_listing"
    PACKAGE_DEAL = "package_deal"
    FIRST_TIME_CUSTOMER = "first_time_customer"
    SEASONAL = "seasonal"


class PromotionStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    EXPIRED = "expired"
    SCHEDULED = "scheduled"


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=True)
    subscription_id = Column(Integer, ForeignKey("subscriptions.id"), nullable=True)
    type = Column(String(20), nullable=False)
    amount = Column(Float, nullable=False)
    currency = Column(String(3), default="LKR", nullable=False)
    payment_method = Column(String(20), nullable=False)
    status = Column(String(20), default=PaymentRecordStatus.PENDING.value, nullable=False)
    transaction_id = Column(String(255), unique=True, index=True, nullable=False)
    external_transaction_id = Column(String(255), nullable=True)  # Gateway reference
    payment_gateway = Column(String(100), nullable=True)
    gateway_response = Column(JSON, nullable=True)
    description = Column(Text, nullable=True)
    receipt_url = Column(String(500), nullable=True)
    paid_at = Column(DateTime, nullable=True)
    refund_reason = Column(Text, nullable=True)
    refunded_at = Column(DateTime, nullable=True)
    refunded_amount = Column(Float, nullable=True)
    metadata_ = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User")
    booking = relationship("Booking")


class Subscription(Base):
    __tablename__ = "subscriptions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String(20), nullable=False)
    status = Column(String(20), default=SubscriptionStatus.ACTIVE.value, nullable=False)
    price = Column(Float, nullable=False)
    currency = Column(String(3), default="LKR", nullable=False)
    billing_cycle = Column(String(10), default=BillingCycle.MONTHLY.value, nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    next_billing_date = Column(DateTime, nullable=True)
    auto_renew = Column(Boolean, default=True, nullable=False)
    cancelled_at = Column(DateTime, nullable=True)
    cancellation_reason = Column(Text, nullable=True)
    features = Column(JSON, nullable=True)  # {tryOnCredits, staffSeats, ...}
    trial_days = Column(Integer, default=0, nullable=False)
    is_trial_used = Column(Boolean, default=False, nullable=False)
    external_subscription_id = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User")


class Promotion(Base):
    __tablename__ = "promotions"

    id = Column(Integer, primary_key=True, index=True)
    salon_id = Column(Integer, ForeignKey("salons.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(30), nullable=False)
    code = Column(String(50), unique=True, index=True, nullable=True)
    discount_value = Column(Float, nullable=False)  # Percent for percentage types, LKR otherwise
    min_purchase_amount = Column(Float, nullable=True)
    max_discount_amount = Column(Float, nullable=True)
    usage_limit = Column(Integer, nullable=True)
    usage_count = Column(Integer, default=0, nullable=False)
    per_customer_limit = Column(Integer, default=1, nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    status = Column(String(20), default=PromotionStatus.ACTIVE.value, nullable=False)
    applicable_service_ids = Column(JSON, nullable=True)
    excluded_service_ids = Column(JSON, nullable=True)
    applicable_days = Column(JSON, nullable=True)  # ["monday", ...]
    image_url = Column(String(500), nullable=True)
    is_first_time_only = Column(Boolean, default=False, nullable=False)
    is_visible = Column(Boolean, default=True, nullable=False)
    requires_code = Column(Boolean, default=True, nullable=False)
    terms_and_conditions = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    salon = relationship("Salon")
