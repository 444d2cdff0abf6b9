import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pilates_api.core.config import get_settings
from pilates_api.core.exceptions import (
    AccountBlockedError,
    ConflictError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
)
from pilates_api.core.security import create_access_token, get_password_hash, verify_password
from pilates_api.models.user import MembershipStatus, User, UserRole
from pilates_api.repositories.user import user_repository
from pilates_api.schemas.user import (
    AvailabilityUpdate,
    BlockUpdate,
    MembershipUpdate,
    PasswordReset,
    TrainerCreate,
    UserCreate,
)

logger = logging.getLogger(__name__)


class UserService:
    def register(self, db: Session, user_in: UserCreate, role: UserRole = UserRole.MEMBER) -> User:
        """
        Registrar un usuario con el rol indicado.

        La contraseña se guarda solo como hash. El email es único para todos los roles:
        la comprobación previa da un mensaje claro y la restricción única de la tabla
        cubre el caso de dos registros simultáneos.

        Raises:
            ConflictError: Si el email ya está registrado
        """
        if user_repository.get_by_email(db, email=user_in.email):
            raise ConflictError("El email ya está registrado")

        user_data = {
            "name": user_in.name,
            "email": user_in.email,
            "hashed_password": get_password_hash(user_in.password),
            "role": role,
            "is_active": True,
            "membership_status": MembershipStatus.INACTIVE.value,
        }
        if isinstance(user_in, TrainerCreate):
            user_data["specialization"] = user_in.specialization
            user_data["availability"] = list(user_in.availability)

        try:
            user = user_repository.create(db, obj_in=user_data)
        except IntegrityError:
            db.rollback()
            logger.warning(f"Registro concurrente detectado para {user_in.email}")
            raise ConflictError("El email ya está registrado")

        logger.info(f"Usuario {user.id} registrado con rol {role.value}")
        return user

    def authenticate(
        self, db: Session, email: str, password: str, role: Optional[UserRole] = None
    ) -> User:
        """
        Validar credenciales. Con `role` solo se aceptan usuarios de ese rol.

        Raises:
            InvalidCredentialsError: Email desconocido o contraseña incorrecta
            AccountBlockedError: El usuario existe pero está bloqueado
        """
        user = user_repository.get_by_email(db, email=email, role=role)
        if not user or not verify_password(password, user.hashed_password):
            logger.info(f"Login fallido para {email}")
            raise InvalidCredentialsError("Email o contraseña incorrectos")
        if not user.is_active:
            logger.info(f"Login rechazado: usuario {user.id} bloqueado")
            raise AccountBlockedError()
        return user

    def login(
        self, db: Session, email: str, password: str, role: Optional[UserRole] = None
    ) -> dict:
        """
        Autenticar y emitir un token con el ID del usuario.
        """
        user = self.authenticate(db, email, password, role=role)
        settings = get_settings()
        token = create_access_token(user.id)
        logger.info(f"Login correcto del usuario {user.id}")
        return {
            "token": token,
            "token_type": "bearer",
            "expires_in": settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            "user": user,
        }

    def get_user(self, db: Session, user_id: int) -> User:
        user = user_repository.get(db, id=user_id)
        if not user:
            raise NotFoundError("Usuario no encontrado")
        return user

    def get_visible_user(self, db: Session, user_id: int, current_user: User) -> User:
        """
        Un usuario solo puede ver su propio perfil, salvo los administradores.
        """
        if current_user.role != UserRole.ADMIN and current_user.id != user_id:
            raise ForbiddenError("Solo puedes consultar tu propio perfil")
        return self.get_user(db, user_id)

    def update_membership(self, db: Session, user_id: int, membership_in: MembershipUpdate) -> User:
        user = self.get_user(db, user_id)
        update_data = {"membership_status": membership_in.status}
        if "expiry_date" in membership_in.model_fields_set:
            update_data["membership_expiry"] = membership_in.expiry_date
        user = user_repository.update(db, db_obj=user, obj_in=update_data)
        logger.info(f"Membresía del usuario {user_id} actualizada a '{membership_in.status}'")
        return user

    def set_active(self, db: Session, user_id: int, block_in: BlockUpdate) -> User:
        user = self.get_user(db, user_id)
        user = user_repository.update(db, db_obj=user, obj_in={"is_active": block_in.is_active})
        logger.info(f"Usuario {user_id} {'desbloqueado' if block_in.is_active else 'bloqueado'}")
        return user

    def update_availability(
        self, db: Session, trainer_id: int, availability_in: AvailabilityUpdate
    ) -> User:
        """
        Reemplaza por completo la disponibilidad del entrenador.
        """
        trainer = user_repository.get_trainer(db, trainer_id=trainer_id)
        if not trainer:
            raise NotFoundError("Entrenador no encontrado")
        return user_repository.update(
            db, db_obj=trainer, obj_in={"availability": list(availability_in.availability)}
        )

    def reset_password(
        self, db: Session, user_id: int, reset_in: PasswordReset, current_user: User
    ) -> User:
        """
        Cambiar la contraseña. Solo el propio usuario o un administrador.
        """
        if current_user.role != UserRole.ADMIN and current_user.id != user_id:
            raise ForbiddenError("Solo puedes cambiar tu propia contraseña")
        user = self.get_user(db, user_id)
        user = user_repository.update(
            db, db_obj=user, obj_in={"hashed_password": get_password_hash(reset_in.new_password)}
        )
        logger.info(f"Contraseña del usuario {user_id} restablecida por el usuario {current_user.id}")
        return user

    def ensure_first_admin(self, db: Session) -> Optional[User]:
        """
        Crea el administrador inicial definido en la configuración, si no existe.
        """
        settings = get_settings()
        if not settings.FIRST_ADMIN_EMAIL or not settings.FIRST_ADMIN_PASSWORD:
            return None
        existing = user_repository.get_by_email(db, email=settings.FIRST_ADMIN_EMAIL)
        if existing:
            return existing
        admin_in = UserCreate(
            name=settings.FIRST_ADMIN_NAME,
            email=settings.FIRST_ADMIN_EMAIL,
            password=settings.FIRST_ADMIN_PASSWORD,
        )
        logger.info("Creando administrador inicial desde la configuración")
        return self.register(db, admin_in, role=UserRole.ADMIN)


user_service = UserService()
