from typing import List, Optional

from sqlalchemy import Row
from sqlalchemy.orm import Session

from pilates_api.models.booking import Booking
from pilates_api.models.schedule import PilatesClass
from pilates_api.models.user import User
from pilates_api.repositories.base import BaseRepository
from pilates_api.schemas.booking import BookingCreate


class BookingRepository(BaseRepository[Booking, BookingCreate, BookingCreate]):
    def get_by_user_and_class(
        self, db: Session, *, user_id: int, class_id: int
    ) -> Optional[Booking]:
        """
        Obtiene la reserva de un usuario para una clase concreta.
        """
        return db.query(Booking).filter(
            Booking.user_id == user_id,
            Booking.class_id == class_id
        ).first()

    def count_by_class(self, db: Session, *, class_id: int) -> int:
        """
        Número de reservas que referencian una clase.
        """
        return db.query(Booking).filter(Booking.class_id == class_id).count()

    def get_members_by_trainer(self, db: Session, *, trainer_id: int) -> List[Row]:
        """
        Pares distintos (usuario, clase) de las reservas en clases del entrenador.

        DISTINCT sobre columnas concretas: PostgreSQL no compara columnas JSON.
        """
        return (
            db.query(
                User.id.label("user_id"),
                User.name.label("member_name"),
                User.email.label("member_email"),
                PilatesClass.id.label("class_id"),
                PilatesClass.name.label("class_name"),
                PilatesClass.date.label("class_date"),
                PilatesClass.time.label("class_time"),
            )
            .join(Booking, Booking.user_id == User.id)
            .join(PilatesClass, Booking.class_id == PilatesClass.id)
            .filter(PilatesClass.trainer_id == trainer_id)
            .distinct()
            .order_by(PilatesClass.date.asc(), PilatesClass.time.asc(), User.name.asc())
            .all()
        )


booking_repository = BookingRepository(Booking)
