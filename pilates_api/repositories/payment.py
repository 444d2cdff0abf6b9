from pilates_api.models.payment import Payment
from pilates_api.repositories.base import BaseRepository
from pilates_api.schemas.payment import MonthlyPaymentCreate


class PaymentRepository(BaseRepository[Payment, MonthlyPaymentCreate, MonthlyPaymentCreate]):
    pass


payment_repository = PaymentRepository(Payment)
