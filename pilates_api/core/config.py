import json
import logging
from functools import lru_cache
from typing import Any, List, Optional, Union

from pydantic import AnyHttpUrl, EmailStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Configurar el logger
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"  # Permitir campos extra en .env
    )

    # Configuración básica
    # Vacío por defecto: las rutas quedan en la raíz (/users, /classes, ...)
    API_V1_STR: str = ""
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    # 60 minutos * 24 horas = 1 día
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Información del proyecto
    PROJECT_NAME: str = "PilatesAPI"
    PROJECT_DESCRIPTION: str = "API con FastAPI para reservas y membresías de un estudio de pilates"
    VERSION: str = "0.1.0"

    # Debug mode
    DEBUG_MODE: bool = False

    # Logging: directorio para el log diario (vacío = solo consola)
    LOG_DIR: str = "logs"

    # CORS
    BACKEND_CORS_ORIGINS: List[AnyHttpUrl] = []

    @field_validator("BACKEND_CORS_ORIGINS", mode='before')
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, str):
            return json.loads(v)
        elif isinstance(v, list):
            return v
        raise ValueError(v)

    DATABASE_URL: str = "sqlite:///./pilates.db"

    @field_validator("DATABASE_URL", mode="before")
    def ensure_proper_url_format(cls, v: Optional[str]) -> Any:
        """Asegura que DATABASE_URL esté en el formato que espera SQLAlchemy."""
        # No loguear el valor completo por seguridad
        if not v:
            return "sqlite:///./pilates.db"
        if v.startswith('postgres://'):
            logger.info("Corrigiendo formato de postgres:// a postgresql://")
            return 'postgresql://' + v[len('postgres://'):]
        return v

    # Administrador inicial (opcional)
    FIRST_ADMIN_EMAIL: Optional[EmailStr] = None
    FIRST_ADMIN_PASSWORD: Optional[str] = None
    FIRST_ADMIN_NAME: str = "Administrador"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


# Usar una función con caché para obtener la configuración
@lru_cache()
def get_settings() -> Settings:
    settings = Settings()
    logger.info("Configuración cargada correctamente")
    return settings
