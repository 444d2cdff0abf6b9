import logging
from typing import Dict, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pilates_api.core.exceptions import DuplicateBookingError, NotFoundError
from pilates_api.models.booking import Booking, BookingStatus
from pilates_api.models.user import User
from pilates_api.repositories.booking import booking_repository
from pilates_api.repositories.schedule import class_repository
from pilates_api.repositories.user import user_repository
from pilates_api.schemas.booking import BookingCreate

logger = logging.getLogger(__name__)


class BookingService:
    def create_booking(self, db: Session, booking_in: BookingCreate, current_user: User) -> Booking:
        """
        Reservar una clase.

        Raises:
            NotFoundError: Si la clase o el usuario no existen
            DuplicateBookingError: Si el usuario ya tiene reserva en esa clase
        """
        user_id = booking_in.user_id if booking_in.user_id is not None else current_user.id

        if not class_repository.exists(db, id=booking_in.class_id):
            raise NotFoundError("Clase no encontrada")
        if not user_repository.exists(db, id=user_id):
            raise NotFoundError("Usuario no encontrado")

        if booking_repository.get_by_user_and_class(db, user_id=user_id, class_id=booking_in.class_id):
            raise DuplicateBookingError()

        try:
            booking = booking_repository.create(db, obj_in={
                "class_id": booking_in.class_id,
                "user_id": user_id,
                "status": BookingStatus.BOOKED.value,
            })
        except IntegrityError:
            # Otra petición insertó la misma reserva entre la comprobación y el insert
            db.rollback()
            raise DuplicateBookingError()

        logger.info(f"Reserva {booking.id}: usuario {user_id} en clase {booking_in.class_id}")
        return booking

    def get_members_by_trainer(self, db: Session, trainer_id: int) -> List[Dict]:
        """
        Obtener los miembros con reserva en alguna clase del entrenador.

        Cada fila es un par distinto (miembro, clase) sin los IDs de unión.
        """
        if not user_repository.get_trainer(db, trainer_id=trainer_id):
            raise NotFoundError("Entrenador no encontrado")

        rows = booking_repository.get_members_by_trainer(db, trainer_id=trainer_id)
        return [
            {
                "member_name": row.member_name,
                "member_email": row.member_email,
                "class_name": row.class_name,
                "class_date": row.class_date,
                "class_time": row.class_time,
            }
            for row in rows
        ]


booking_service = BookingService()
