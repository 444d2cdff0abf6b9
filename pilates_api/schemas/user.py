from typing import Any, List, Optional
from datetime import datetime

from pydantic import EmailStr, Field, StrictBool, field_validator

from pilates_api.models.user import UserRole
from pilates_api.core.timezone_utils import to_naive_utc
from pilates_api.schemas.base import CamelModel


# Propiedades para registrar un usuario (miembro o administrador)
class UserCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        # Un email identifica una sola cuenta sin distinguir mayúsculas
        return v.lower()


# Registro de entrenador: añade especialidad y disponibilidad
class TrainerCreate(UserCreate):
    specialization: Optional[str] = None
    availability: List[Any] = Field(default_factory=list)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


# Propiedades para retornar a través de API (nunca incluye el hash)
class User(CamelModel):
    id: int
    name: str
    email: EmailStr
    role: UserRole
    is_active: bool
    membership_status: str
    membership_expiry: Optional[datetime] = None
    specialization: Optional[str] = None
    availability: Optional[List[Any]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Token(CamelModel):
    token: str
    token_type: str = "bearer"
    expires_in: int  # segundos
    user: User


class MembershipUpdate(CamelModel):
    status: str = Field(..., min_length=1, max_length=20)
    expiry_date: Optional[datetime] = None

    @field_validator("expiry_date")
    @classmethod
    def normalize_expiry(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class BlockUpdate(CamelModel):
    # StrictBool: "false" o 0 no se aceptan como booleanos
    is_active: StrictBool


class AvailabilityUpdate(CamelModel):
    availability: List[Any]


class PasswordReset(CamelModel):
    new_password: str = Field(..., min_length=6, max_length=72)
