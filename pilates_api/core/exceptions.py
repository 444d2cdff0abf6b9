"""
Errores de dominio y su traducción a respuestas JSON.

Cada error es un HTTPException con su código fijo, de modo que los servicios
los lanzan igual que cualquier otro HTTPException. Todas las respuestas de
error tienen la forma {"error": "<mensaje>"}.
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Error interno del servidor"


class APIError(HTTPException):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = INTERNAL_ERROR_MESSAGE

    def __init__(self, detail: Optional[str] = None, headers: Optional[dict] = None):
        super().__init__(
            status_code=self.status_code,
            detail=detail or self.default_detail,
            headers=headers,
        )


class BadRequestError(APIError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Petición inválida"


class UnauthenticatedError(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "No autenticado"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class InvalidTokenError(UnauthenticatedError):
    default_detail = "Token inválido o expirado"


class InvalidCredentialsError(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Credenciales inválidas"


class AccountBlockedError(APIError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "La cuenta está bloqueada"


class ForbiddenError(APIError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Permisos insuficientes para realizar esta acción"


class NotFoundError(APIError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Recurso no encontrado"


# Los conflictos se devuelven como 400 (no 409)
class ConflictError(APIError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Conflicto con el estado actual del recurso"


class DuplicateBookingError(ConflictError):
    default_detail = "El usuario ya tiene una reserva para esta clase"


def _format_validation_errors(errors: Any) -> str:
    """Convierte los errores de pydantic en un mensaje legible."""
    missing = []
    invalid = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        if err.get("type") == "missing":
            missing.append(field)
        else:
            invalid.append(f"{field}: {err.get('msg')}")

    parts = []
    if missing:
        parts.append("Campos requeridos faltantes: " + ", ".join(missing))
    if invalid:
        parts.append("Campos inválidos: " + "; ".join(invalid))
    return ". ".join(parts) or "Petición inválida"


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
        return JSONResponse(
            {"error": exc.detail if isinstance(exc.detail, str) else str(exc.detail)},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = _format_validation_errors(exc.errors())
        logger.info(f"Validación fallida en {request.method} {request.url.path}: {message}")
        return JSONResponse({"error": message}, status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        # Nunca exponer el detalle interno al cliente
        logger.error(f"Error no controlado en {request.method} {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            {"error": INTERNAL_ERROR_MESSAGE},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
