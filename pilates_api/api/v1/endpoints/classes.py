"""
Classes Module - API Endpoints

Schedule view for every authenticated user; creation, update and deletion
for trainers and admins.
"""

from typing import Any, List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from pilates_api.core.auth import get_current_user, require_roles
from pilates_api.db.session import get_db
from pilates_api.models.user import User, UserRole
from pilates_api.schemas.schedule import ClassCreate, ClassUpdate, PilatesClass
from pilates_api.services.schedule import class_service

router = APIRouter()


@router.get("/classes/schedule", response_model=List[PilatesClass])
def read_schedule(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Próximas clases (fecha igual o posterior a ahora), ordenadas por fecha y hora.
    """
    return class_service.get_schedule(db)


@router.get("/classes/{class_id}", response_model=PilatesClass)
def read_class(
    class_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    return class_service.get_class(db, class_id)


@router.post("/classes", response_model=PilatesClass, status_code=status.HTTP_201_CREATED)
def create_class(
    class_in: ClassCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.TRAINER, UserRole.ADMIN)),
) -> Any:
    """
    Crear una clase. `trainerId` debe ser un entrenador existente.
    """
    return class_service.create_class(db, class_in)


@router.put("/classes/{class_id}", response_model=PilatesClass)
def update_class(
    class_id: int,
    class_in: ClassUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.TRAINER, UserRole.ADMIN)),
) -> Any:
    """
    Actualización parcial de una clase. `updatedAt` se refresca en cada llamada.
    """
    return class_service.update_class(db, class_id, class_in)


@router.delete("/classes/{class_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_class(
    class_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.TRAINER, UserRole.ADMIN)),
) -> Response:
    """
    Eliminar una clase sin reservas.
    """
    class_service.delete_class(db, class_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
