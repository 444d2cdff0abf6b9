from typing import Optional

from sqlalchemy.orm import Session

from pilates_api.models.user import User, UserRole
from pilates_api.repositories.base import BaseRepository
from pilates_api.schemas.user import UserCreate


class UserRepository(BaseRepository[User, UserCreate, UserCreate]):
    def get_by_email(
        self, db: Session, *, email: str, role: Optional[UserRole] = None
    ) -> Optional[User]:
        """
        Obtener un usuario por email (en minúsculas), opcionalmente restringido a un rol.
        """
        query = db.query(User).filter(User.email == email.lower())
        if role is not None:
            query = query.filter(User.role == role)
        return query.first()

    def get_trainer(self, db: Session, *, trainer_id: int) -> Optional[User]:
        """
        Obtener un usuario solo si existe y tiene rol de entrenador.
        """
        return db.query(User).filter(
            User.id == trainer_id,
            User.role == UserRole.TRAINER
        ).first()


user_repository = UserRepository(User)
