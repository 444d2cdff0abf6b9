from pilates_api.models.user import User, UserRole, MembershipStatus
from pilates_api.models.schedule import PilatesClass
from pilates_api.models.booking import Booking, BookingStatus
from pilates_api.models.payment import Payment, PaymentStatus
