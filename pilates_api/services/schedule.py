import logging
from typing import List

from sqlalchemy.orm import Session

from pilates_api.core.exceptions import BadRequestError, ConflictError, NotFoundError
from pilates_api.core.timezone_utils import utcnow
from pilates_api.models.schedule import PilatesClass
from pilates_api.repositories.booking import booking_repository
from pilates_api.repositories.schedule import class_repository
from pilates_api.repositories.user import user_repository
from pilates_api.schemas.schedule import ClassCreate, ClassUpdate

logger = logging.getLogger(__name__)

# Columnas que admiten null al actualizar una clase
NULLABLE_CLASS_FIELDS = {"description"}


class ClassService:
    def _ensure_trainer(self, db: Session, trainer_id: int) -> None:
        if not user_repository.get_trainer(db, trainer_id=trainer_id):
            raise NotFoundError("Entrenador no encontrado")

    def get_class(self, db: Session, class_id: int) -> PilatesClass:
        pilates_class = class_repository.get(db, id=class_id)
        if not pilates_class:
            raise NotFoundError("Clase no encontrada")
        return pilates_class

    def get_schedule(self, db: Session) -> List[PilatesClass]:
        """
        Clases desde ahora en adelante, ordenadas por fecha y hora.
        """
        return class_repository.get_upcoming(db, now=utcnow())

    def create_class(self, db: Session, class_in: ClassCreate) -> PilatesClass:
        self._ensure_trainer(db, class_in.trainer_id)
        pilates_class = class_repository.create(db, obj_in=class_in)
        logger.info(f"Clase {pilates_class.id} creada para el entrenador {class_in.trainer_id}")
        return pilates_class

    def update_class(self, db: Session, class_id: int, class_in: ClassUpdate) -> PilatesClass:
        """
        Actualización parcial. Si cambia el entrenador se vuelve a validar, y
        updated_at se refresca siempre.
        """
        pilates_class = self.get_class(db, class_id)

        update_data = class_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if value is None and field not in NULLABLE_CLASS_FIELDS:
                raise BadRequestError(f"El campo {field} no puede ser nulo")

        if "trainer_id" in update_data:
            self._ensure_trainer(db, update_data["trainer_id"])

        update_data["updated_at"] = utcnow()
        return class_repository.update(db, db_obj=pilates_class, obj_in=update_data)

    def delete_class(self, db: Session, class_id: int) -> None:
        """
        Eliminar una clase sin reservas.

        Raises:
            NotFoundError: Si la clase no existe
            ConflictError: Si alguna reserva referencia la clase
        """
        self.get_class(db, class_id)
        bookings = booking_repository.count_by_class(db, class_id=class_id)
        if bookings:
            raise ConflictError(f"No se puede eliminar una clase con reservas ({bookings})")
        class_repository.remove(db, id=class_id)
        logger.info(f"Clase {class_id} eliminada")


class_service = ClassService()
