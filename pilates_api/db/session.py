import logging

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from pilates_api.core.config import get_settings

logger = logging.getLogger(__name__)

# Obtener la instancia de configuración
settings_instance = get_settings()

db_url = settings_instance.DATABASE_URL

# Ocultar credenciales en el log
display_url = db_url
if '@' in display_url:
    scheme, rest = display_url.split('://', 1)
    display_url = f"{scheme}://***@{rest.split('@', 1)[1]}"

if settings_instance.is_sqlite:
    # SQLite (desarrollo y tests): la conexión se comparte entre hilos del threadpool
    engine = create_engine(
        db_url,
        echo=False,
        connect_args={"check_same_thread": False},
    )
else:
    engine = create_engine(
        db_url,
        echo=False,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        pool_timeout=30,
        pool_recycle=180,
    )

logger.info(f"Engine creado correctamente: {display_url}")

# Crear clase de sesión
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Dependencia para obtener la sesión de DB
def get_db():
    db = SessionLocal()
    try:
        yield db
    except SQLAlchemyError as e:
        logger.error(f"Error de SQLAlchemy en la sesión: {e}", exc_info=True)
        db.rollback()  # Hacer rollback en caso de error
        raise  # Relanzar la excepción para que FastAPI la maneje
    finally:
        # Asegurarse siempre de cerrar la sesión
        db.close()
