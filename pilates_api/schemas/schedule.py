from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from pilates_api.core.timezone_utils import to_naive_utc
from pilates_api.schemas.base import CamelModel

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class ClassBase(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    date: Optional[datetime] = None
    time: Optional[str] = Field(None, pattern=TIME_PATTERN, description="Hora de inicio HH:MM")
    duration: Optional[int] = Field(None, gt=0, description="Duración en minutos")
    max_participants: Optional[int] = Field(None, gt=0)
    trainer_id: Optional[int] = None

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class ClassCreate(ClassBase):
    name: str = Field(..., min_length=1, max_length=100)
    date: datetime
    time: str = Field(..., pattern=TIME_PATTERN, description="Hora de inicio HH:MM")
    duration: int = Field(..., gt=0, description="Duración en minutos")
    max_participants: int = Field(..., gt=0)
    trainer_id: int


class ClassUpdate(ClassBase):
    pass


class PilatesClass(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    date: datetime
    time: str
    duration: int
    max_participants: int
    trainer_id: int
    created_at: datetime
    updated_at: datetime
