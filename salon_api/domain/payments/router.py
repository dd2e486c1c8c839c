"""Payment router - FastAPI endpoints for payment records"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_admin
from ...database import get_db
from ...models import User
from .schemas import PaymentCreate, PaymentResponse, PaymentStatusUpdate
from .service import PaymentService

router = APIRouter(prefix="/payments", tags=["Payments"])


def get_payment_service(db: Session = Depends(get_db)) -> PaymentService:
    """Dependency injection for PaymentService"""
    return PaymentService(db)


@router.get("/my-payments", response_model=list[PaymentResponse])
async def my_payments(
    current_user: User = Depends(get_current_user),
    service: PaymentService = Depends(get_payment_service),
):
    return service.get_user_payments(current_user)


@router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
async def create_payment(
    data: PaymentCreate,
    current_user: User = Depends(get_current_user),
    service: PaymentService = Depends(get_payment_service),
):
    """Record a pending payment; the gateway outcome is applied via the status endpoint"""
    return service.create_payment(data, current_user)


@router.patch("/{transaction_id}/status", response_model=PaymentResponse)
async def update_payment_status(
    transaction_id: str,
    data: PaymentStatusUpdate,
    current_user: User = Depends(require_admin),
    service: PaymentService = Depends(get_payment_service),
):
    return service.update_status(transaction_id, data, current_user)
