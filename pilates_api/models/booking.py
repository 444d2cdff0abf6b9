import enum

from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship

from pilates_api.core.timezone_utils import utcnow
from pilates_api.db.base_class import Base


class BookingStatus(str, enum.Enum):
    BOOKED = "booked"


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    status = Column(String(20), default=BookingStatus.BOOKED.value, nullable=False)
    booked_at = Column(DateTime, default=utcnow, nullable=False)

    # Relaciones
    pilates_class = relationship("PilatesClass", back_populates="bookings")
    user = relationship("User", back_populates="bookings")

    # Una sola reserva por usuario y clase, también ante peticiones concurrentes
    __table_args__ = (
        UniqueConstraint('user_id', 'class_id', name='uq_booking_user_class'),
    )
