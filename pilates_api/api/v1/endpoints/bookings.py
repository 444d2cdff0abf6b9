from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from pilates_api.core.auth import get_current_user
from pilates_api.db.session import get_db
from pilates_api.models.user import User
from pilates_api.schemas.booking import Booking, BookingCreate
from pilates_api.services.booking import booking_service

router = APIRouter()


@router.post("/bookings", response_model=Booking, status_code=status.HTTP_201_CREATED)
def create_booking(
    booking_in: BookingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Reservar una clase. Sin `userId` la reserva es para el usuario autenticado.
    """
    return booking_service.create_booking(db, booking_in, current_user)
