import os

# Configuración de entorno ANTES de importar la aplicación
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_DIR"] = ""
os.environ.pop("FIRST_ADMIN_EMAIL", None)
os.environ.pop("FIRST_ADMIN_PASSWORD", None)

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pilates_api.core.security import create_access_token, get_password_hash, pwd_context
from pilates_api.core.timezone_utils import utcnow
from pilates_api.db.base import Base
from pilates_api.db.session import get_db
from pilates_api.main import app
from pilates_api.models.user import MembershipStatus, User, UserRole
from pilates_api.models.schedule import PilatesClass

# bcrypt con pocas rondas para que los tests sean rápidos
pwd_context.update(bcrypt__rounds=4)

# Usar una base de datos en memoria para pruebas
SQLALCHEMY_DATABASE_URL = "sqlite://"


@pytest.fixture(scope="function")
def db_engine():
    """
    Motor SQLite en memoria con las tablas creadas; una base limpia por test.
    """
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """
    Crea una sesión de base de datos fresca para cada test y la cierra al finalizar.
    """
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """
    Crea un cliente de prueba usando la sesión de base de datos de prueba.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def _create_user(db, *, name, email, password, role, **extra):
    user = User(
        name=name,
        email=email,
        hashed_password=get_password_hash(password),
        role=role,
        is_active=extra.pop("is_active", True),
        membership_status=extra.pop("membership_status", MembershipStatus.INACTIVE.value),
        **extra,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers_for(user) -> dict:
    """Headers con un bearer token válido para el usuario."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture(scope="function")
def make_user(db):
    """Devuelve una función para crear usuarios adicionales en la base de prueba."""
    def _make(**kwargs):
        return _create_user(db, **kwargs)
    return _make


@pytest.fixture(scope="function")
def make_headers():
    """Devuelve la función que genera headers de autenticación para un usuario."""
    return auth_headers_for


# Fixture para crear un usuario administrador de prueba
@pytest.fixture(scope="function")
def admin_user(db):
    return _create_user(
        db, name="Admin Test", email="admin@test.com", password="admin_password", role=UserRole.ADMIN
    )


# Fixture para crear un entrenador de prueba
@pytest.fixture(scope="function")
def trainer_user(db):
    return _create_user(
        db, name="Trainer Test", email="trainer@test.com", password="trainer_password",
        role=UserRole.TRAINER, specialization="Reformer", availability=["monday 09:00-13:00"],
    )


# Fixture para crear un miembro de prueba
@pytest.fixture(scope="function")
def member_user(db):
    return _create_user(
        db, name="Member Test", email="member@test.com", password="member_password", role=UserRole.MEMBER
    )


@pytest.fixture(scope="function")
def other_member(db):
    return _create_user(
        db, name="Other Member", email="other@test.com", password="other_password", role=UserRole.MEMBER
    )


@pytest.fixture(scope="function")
def admin_headers(admin_user):
    return auth_headers_for(admin_user)


@pytest.fixture(scope="function")
def trainer_headers(trainer_user):
    return auth_headers_for(trainer_user)


@pytest.fixture(scope="function")
def member_headers(member_user):
    return auth_headers_for(member_user)


# Fixture para crear una clase futura del entrenador de prueba
@pytest.fixture(scope="function")
def pilates_class(db, trainer_user):
    pilates_class = PilatesClass(
        name="Reformer Intermedio",
        description="Clase de reformer de nivel intermedio",
        date=utcnow() + timedelta(days=3),
        time="10:00",
        duration=50,
        max_participants=8,
        trainer_id=trainer_user.id,
    )
    db.add(pilates_class)
    db.commit()
    db.refresh(pilates_class)
    return pilates_class
