import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from pilates_api.core.config import get_settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    """Hash de una sola vía con bcrypt."""
    return str(pwd_context.hash(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Compara una contraseña en texto plano con su hash.

    Un hash corrupto o desconocido cuenta como contraseña incorrecta.
    """
    try:
        return bool(pwd_context.verify(plain_password, hashed_password))
    except (ValueError, TypeError) as e:
        logger.error(f"Error verificando contraseña: {e}")
        return False


def create_access_token(subject: Any, expires_delta: Optional[timedelta] = None) -> str:
    """
    Emite un JWT firmado cuyo claim `sub` es el identificador del usuario.

    Args:
        subject: ID del usuario (se guarda como string)
        expires_delta: Validez del token; por defecto ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        str: Token codificado
    """
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    now = datetime.now(timezone.utc)
    to_encode = {"sub": str(subject), "iat": now, "exp": now + expires_delta}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verifica firma y expiración del token.

    Raises:
        JWTError: Si el token está mal formado, expirado o mal firmado
    """
    settings = get_settings()
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
