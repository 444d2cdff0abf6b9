"""
Autenticación por bearer token y autorización por rol.

`get_current_user` extrae el token del header Authorization, lo verifica,
resuelve el usuario en la base de datos y lo deja en `request.state.user`.
`require_roles` construye una dependencia que además exige que el rol del
usuario pertenezca al conjunto permitido.
"""

import logging
from typing import Iterable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from pilates_api.core.exceptions import (
    ForbiddenError,
    InvalidTokenError,
    UnauthenticatedError,
)
from pilates_api.core.security import decode_access_token
from pilates_api.db.session import get_db
from pilates_api.models.user import User, UserRole
from pilates_api.repositories.user import user_repository

logger = logging.getLogger(__name__)

# auto_error=False: la ausencia del header se reporta con nuestro propio error
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Verifica el bearer token y devuelve el usuario autenticado.

    Raises:
        UnauthenticatedError: Si falta el header o el usuario ya no existe
        InvalidTokenError: Si el token está mal formado, expirado o mal firmado
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("Falta el header Authorization: Bearer <token>")

    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError as e:
        logger.info(f"Token rechazado: {e}")
        raise InvalidTokenError()

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        raise InvalidTokenError("El token no contiene un identificador de usuario válido")

    user = user_repository.get(db, id=user_id)
    if not user:
        raise UnauthenticatedError("Usuario del token no encontrado")

    request.state.user = user
    return user


def is_role_allowed(role: UserRole, allowed_roles: Iterable[UserRole]) -> bool:
    """Predicado puro: ¿el rol pertenece al conjunto permitido?"""
    return UserRole(role) in set(allowed_roles)


def require_roles(*roles: UserRole):
    """
    Factoría de dependencia que exige uno de los roles indicados.

    Ejemplo de uso:
        @router.post("/classes")
        def create_class(current_user: User = Depends(require_roles(UserRole.TRAINER, UserRole.ADMIN))):
            ...

    Args:
        roles: Roles permitidos para la ruta

    Returns:
        Dependencia FastAPI que devuelve el usuario autenticado
    """
    allowed = frozenset(roles)

    def dependency(current_user: User = Depends(get_current_user)) -> User:
        if not is_role_allowed(current_user.role, allowed):
            logger.info(
                f"Usuario {current_user.id} con rol {current_user.role} sin acceso "
                f"(requiere {sorted(r.value for r in allowed)})"
            )
            raise ForbiddenError()
        return current_user

    return dependency
