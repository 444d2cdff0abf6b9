from datetime import datetime
from typing import Optional

from pydantic import Field

from pilates_api.schemas.base import CamelModel


class MonthlyPaymentCreate(CamelModel):
    # Si no se indica, el pago es del usuario autenticado
    user_id: Optional[int] = None
    amount: float = Field(..., gt=0)
    payment_method: str = Field(..., min_length=1, max_length=50)


class Payment(CamelModel):
    id: int
    user_id: int
    amount: float
    payment_method: str
    status: str
    payment_date: datetime
    expires_at: datetime
