from datetime import datetime
from typing import List

from sqlalchemy.orm import Session

from pilates_api.models.schedule import PilatesClass
from pilates_api.repositories.base import BaseRepository
from pilates_api.schemas.schedule import ClassCreate, ClassUpdate


class ClassRepository(BaseRepository[PilatesClass, ClassCreate, ClassUpdate]):
    def get_upcoming(self, db: Session, *, now: datetime) -> List[PilatesClass]:
        """
        Clases con fecha igual o posterior a `now`, ordenadas por fecha y hora.
        """
        return (
            db.query(PilatesClass)
            .filter(PilatesClass.date >= now)
            .order_by(PilatesClass.date.asc(), PilatesClass.time.asc())
            .all()
        )


class_repository = ClassRepository(PilatesClass)
