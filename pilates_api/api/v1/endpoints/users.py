"""
Users Module - API Endpoints

Registration and login for members and admins, plus the admin-side account
operations: reading a profile, blocking/unblocking and password resets.
"""

from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from pilates_api.core.auth import get_current_user, require_roles
from pilates_api.db.session import get_db
from pilates_api.models.user import User, UserRole
from pilates_api.schemas.user import (
    BlockUpdate,
    LoginRequest,
    PasswordReset,
    Token,
    User as UserSchema,
    UserCreate,
)
from pilates_api.services.user import user_service

router = APIRouter()


@router.post("/users", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
def register_member(user_in: UserCreate, db: Session = Depends(get_db)) -> Any:
    """
    Registrar un nuevo miembro.

    La contraseña se guarda hasheada y nunca se devuelve.

    Raises:
        HTTPException: 400 si el email ya está registrado o faltan campos
    """
    return user_service.register(db, user_in, role=UserRole.MEMBER)


@router.post("/user/login", response_model=Token)
def login_member(credentials: LoginRequest, db: Session = Depends(get_db)) -> Any:
    """
    Intercambia email y contraseña por un bearer token válido durante 24 horas.
    """
    return user_service.login(db, credentials.email, credentials.password)


@router.get("/users/{user_id}", response_model=UserSchema)
def read_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Obtiene el perfil de un usuario. Miembros y entrenadores solo pueden ver el suyo.
    """
    return user_service.get_visible_user(db, user_id, current_user)


@router.put("/users/{user_id}/block", response_model=UserSchema)
def block_user(
    user_id: int,
    block_in: BlockUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.ADMIN)),
) -> Any:
    """
    Bloquear (`isActive: false`) o desbloquear (`isActive: true`) una cuenta. Solo administradores.
    """
    return user_service.set_active(db, user_id, block_in)


@router.post("/users/{user_id}/reset-password")
def reset_password(
    user_id: int,
    reset_in: PasswordReset,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Establecer una nueva contraseña. Permitido al propio usuario y a los administradores.
    """
    user_service.reset_password(db, user_id, reset_in, current_user)
    return {"message": "Contraseña actualizada correctamente"}


@router.post("/admins", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
def register_admin(
    user_in: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.ADMIN)),
) -> Any:
    """
    Registrar otro administrador. Solo puede hacerlo un administrador; el primero
    se crea a partir de FIRST_ADMIN_EMAIL / FIRST_ADMIN_PASSWORD.
    """
    return user_service.register(db, user_in, role=UserRole.ADMIN)


@router.post("/admin/login", response_model=Token)
def login_admin(credentials: LoginRequest, db: Session = Depends(get_db)) -> Any:
    """
    Login restringido a cuentas de administrador.
    """
    return user_service.login(db, credentials.email, credentials.password, role=UserRole.ADMIN)
