"""Payment domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, Field, field_validator, model_validator

from ...models_billing import PaymentMethod, PaymentRecordStatus, PaymentType
from ...shared.schemas import CamelModel


class PaymentCreate(CamelModel):
    type: PaymentType
    booking_id: Optional[int] = None
    subscription_id: Optional[int] = None
    amount: float = Field(gt=0)
    currency: str = Field(default="LKR", min_length=3, max_length=3)
    payment_method: PaymentMethod
    description: Optional[str] = None
    metadata: Optional[dict] = None

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v):
        return v.upper()

    @model_validator(mode="after")
    def check_booking_reference(self):
        if self.type == PaymentType.BOOKING and self.booking_id is None:
            raise ValueError("bookingId is required for booking payments")
        return self


class PaymentStatusUpdate(CamelModel):
    status: PaymentRecordStatus
    external_transaction_id: Optional[str] = None
    payment_gateway: Optional[str] = None
    gateway_response: Optional[dict] = None
    receipt_url: Optional[str] = None
    refund_reason: Optional[str] = None
    refunded_amount: Optional[float] = Field(default=None, gt=0)


class PaymentResponse(CamelModel):
    id: int
    user_id: int
    booking_id: Optional[int] = None
    subscription_id: Optional[int] = None
    type: PaymentType
    amount: float
    currency: str
    payment_method: PaymentMethod
    status: PaymentRecordStatus
    transaction_id: str
    external_transaction_id: Optional[str] = None
    payment_gateway: Optional[str] = None
    description: Optional[str] = None
    receipt_url: Optional[str] = None
    paid_at: Optional[datetime] = None
    refund_reason: Optional[str] = None
    refunded_at: Optional[datetime] = None
    refunded_amount: Optional[float] = None
    # ORM attribute is metadata_ (metadata is reserved on declarative models)
    payment_metadata: Optional[dict] = Field(
        default=None, alias="metadata", validation_alias=AliasChoices("metadata_", "metadata")
    )
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
