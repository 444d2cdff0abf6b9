from datetime import datetime
from typing import Optional

from pilates_api.schemas.base import CamelModel


class BookingCreate(CamelModel):
    class_id: int
    # Si no se indica, la reserva es para el usuario autenticado
    user_id: Optional[int] = None


class Booking(CamelModel):
    id: int
    class_id: int
    user_id: int
    status: str
    booked_at: datetime


class AssignedMember(CamelModel):
    """Fila del listado de miembros de un entrenador (sin claves de unión)."""
    member_name: str
    member_email: str
    class_name: str
    class_date: datetime
    class_time: str
