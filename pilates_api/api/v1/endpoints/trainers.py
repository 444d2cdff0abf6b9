"""
Trainers Module - API Endpoints

Trainer registration and login, availability management and the list of
members booked into a trainer's classes.
"""

from typing import Any, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from pilates_api.core.auth import require_roles
from pilates_api.db.session import get_db
from pilates_api.models.user import User, UserRole
from pilates_api.schemas.booking import AssignedMember
from pilates_api.schemas.user import (
    AvailabilityUpdate,
    LoginRequest,
    Token,
    TrainerCreate,
    User as UserSchema,
)
from pilates_api.services.booking import booking_service
from pilates_api.services.user import user_service

router = APIRouter()


@router.post("/trainers", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
def register_trainer(trainer_in: TrainerCreate, db: Session = Depends(get_db)) -> Any:
    """
    Registrar un entrenador con especialidad y disponibilidad opcionales.
    """
    return user_service.register(db, trainer_in, role=UserRole.TRAINER)


@router.post("/trainer/login", response_model=Token)
def login_trainer(credentials: LoginRequest, db: Session = Depends(get_db)) -> Any:
    """
    Login restringido a cuentas de entrenador.
    """
    return user_service.login(db, credentials.email, credentials.password, role=UserRole.TRAINER)


@router.get("/trainers/{trainer_id}/members", response_model=List[AssignedMember])
def read_trainer_members(
    trainer_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.TRAINER, UserRole.ADMIN)),
) -> Any:
    """
    Pares distintos (miembro, clase) con reserva en las clases del entrenador.
    """
    return booking_service.get_members_by_trainer(db, trainer_id)


@router.put("/trainers/{trainer_id}/availability", response_model=UserSchema)
def update_trainer_availability(
    trainer_id: int,
    availability_in: AvailabilityUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.TRAINER, UserRole.ADMIN)),
) -> Any:
    """
    Reemplazar la lista de disponibilidad del entrenador.
    """
    return user_service.update_availability(db, trainer_id, availability_in)
