from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from pilates_api.core.auth import get_current_user
from pilates_api.db.session import get_db
from pilates_api.models.user import User
from pilates_api.schemas.payment import MonthlyPaymentCreate, Payment
from pilates_api.services.payment import payment_service

router = APIRouter()


@router.post("/payments/monthly", response_model=Payment, status_code=status.HTTP_201_CREATED)
def create_monthly_payment(
    payment_in: MonthlyPaymentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Registrar un pago mensual (vence un mes de calendario después) y marcar
    la membresía del usuario como activa.
    """
    return payment_service.create_monthly_payment(db, payment_in, current_user)
