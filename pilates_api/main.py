import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

# Importar la función de configuración de logging
from pilates_api.core.logging_config import setup_logging

# Llamar a la configuración de logging ANTES de importar/crear otros elementos
setup_logging()

# Ahora importar el resto
from pilates_api.api.v1.api import api_router
from pilates_api.core.config import get_settings
from pilates_api.core.exceptions import register_error_handlers
from pilates_api.db.base import Base
from pilates_api.db.session import SessionLocal, engine
from pilates_api.middleware.timing import TimingMiddleware
from pilates_api.services.user import user_service

logger = logging.getLogger(__name__)

# Obtener la instancia de configuración al inicio del módulo
settings_instance = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Lifespan: Startup iniciado...")

    # Crear tablas si no existen
    Base.metadata.create_all(bind=engine)
    logger.info("Lifespan: Tablas verificadas.")

    # Administrador inicial opcional
    db = SessionLocal()
    try:
        admin = user_service.ensure_first_admin(db)
        if admin:
            logger.info(f"Lifespan: Administrador inicial disponible (id={admin.id}).")
    finally:
        db.close()

    yield  # Aplicación en ejecución

    logger.info("Lifespan: Shutdown iniciado...")
    engine.dispose()


app = FastAPI(
    title=settings_instance.PROJECT_NAME,
    description=settings_instance.PROJECT_DESCRIPTION,
    version=settings_instance.VERSION,
    openapi_url=f"{settings_instance.API_V1_STR}/openapi.json",
    docs_url=f"{settings_instance.API_V1_STR}/docs",
    redoc_url=f"{settings_instance.API_V1_STR}/redoc",
    lifespan=lifespan,
)

# Respuestas de error homogéneas {"error": ...}
register_error_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"Middleware: Recibida petición: {request.method} {request.url.path}")

    # Nunca loguear el token completo
    auth_header = request.headers.get("authorization", "")
    if settings_instance.DEBUG_MODE:
        if auth_header.startswith("Bearer "):
            token = auth_header[7:]
            logger.debug("TOKEN PREVIEW: ****%s", token[-6:] if len(token) > 6 else "")
        elif auth_header:
            logger.debug("AUTH HEADER presente (no Bearer)")
        else:
            logger.debug("NO AUTH HEADER presente")

    response = await call_next(request)

    logger.info(f"Middleware: Enviando respuesta: {response.status_code}")
    return response


# Añadir middleware para medir el tiempo de respuesta
app.add_middleware(TimingMiddleware)

# Configurar CORS para toda la aplicación
app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin).rstrip("/") for origin in settings_instance.BACKEND_CORS_ORIGINS],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=86400,  # 24 horas en segundos
)

# Incluir routers
app.include_router(api_router, prefix=settings_instance.API_V1_STR)


# Ruta raíz
@app.get("/")
def root():
    return {
        "message": f"Bienvenido a {settings_instance.PROJECT_NAME}",
        "docs": f"{settings_instance.API_V1_STR}/docs",
    }


if __name__ == "__main__":
    uvicorn.run("pilates_api.main:app", host="0.0.0.0", port=8000, reload=settings_instance.DEBUG_MODE)
