from sqlalchemy import Boolean, Column, Integer, String, DateTime, Enum, JSON
from sqlalchemy.orm import relationship
import enum

from pilates_api.core.timezone_utils import utcnow
from pilates_api.db.base_class import Base


class UserRole(str, enum.Enum):
    MEMBER = "member"    # Miembro regular
    TRAINER = "trainer"  # Entrenador
    ADMIN = "admin"      # Administrador del estudio


class MembershipStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class User(Base):
    """Miembros, entrenadores y administradores comparten tabla; el rol los distingue."""
    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(Enum(UserRole, values_callable=lambda e: [m.value for m in e]),
                  default=UserRole.MEMBER, nullable=False, index=True)
    is_active = Column(Boolean(), default=True, nullable=False)

    # Membresía (texto libre: el admin puede fijar cualquier estado)
    membership_status = Column(String(20), default=MembershipStatus.INACTIVE.value, nullable=False)
    membership_expiry = Column(DateTime, nullable=True)

    # Solo entrenadores
    specialization = Column(String, nullable=True)
    availability = Column(JSON, nullable=True)  # lista tal cual la envía el cliente

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relaciones
    classes = relationship("PilatesClass", back_populates="trainer")
    bookings = relationship("Booking", back_populates="user")
    payments = relationship("Payment", back_populates="user")

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
