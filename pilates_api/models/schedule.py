from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text
from sqlalchemy.orm import relationship

from pilates_api.core.timezone_utils import utcnow
from pilates_api.db.base_class import Base


class PilatesClass(Base):
    """Clase programada del estudio, impartida por un entrenador"""
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    date = Column(DateTime, nullable=False, index=True)  # UTC sin tzinfo
    time = Column(String(5), nullable=False)  # "HH:MM"
    duration = Column(Integer, nullable=False)  # minutos
    max_participants = Column(Integer, nullable=False)
    trainer_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)

    # Campos de auditoría
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    # Relaciones
    trainer = relationship("User", back_populates="classes")
    bookings = relationship("Booking", back_populates="pilates_class")

    def __repr__(self):
        return f"<PilatesClass(id={self.id}, name='{self.name}', date={self.date})>"
