import logging

from dateutil.relativedelta import relativedelta
from sqlalchemy.orm import Session

from pilates_api.core.exceptions import NotFoundError
from pilates_api.core.timezone_utils import utcnow
from pilates_api.models.payment import Payment, PaymentStatus
from pilates_api.models.user import MembershipStatus, User
from pilates_api.repositories.payment import payment_repository
from pilates_api.repositories.user import user_repository
from pilates_api.schemas.payment import MonthlyPaymentCreate

logger = logging.getLogger(__name__)


class PaymentService:
    def create_monthly_payment(
        self, db: Session, payment_in: MonthlyPaymentCreate, current_user: User
    ) -> Payment:
        """
        Registrar el pago mensual y activar la membresía del usuario.

        El pago y el cambio de estado de la membresía se confirman en un único
        commit: si falla uno, no queda ninguno.

        Raises:
            NotFoundError: Si el usuario no existe
        """
        user_id = payment_in.user_id if payment_in.user_id is not None else current_user.id
        user = user_repository.get(db, id=user_id)
        if not user:
            raise NotFoundError("Usuario no encontrado")

        now = utcnow()
        try:
            payment = payment_repository.create(db, obj_in={
                "user_id": user.id,
                "amount": payment_in.amount,
                "payment_method": payment_in.payment_method,
                "status": PaymentStatus.COMPLETED.value,
                "payment_date": now,
                # Un mes de calendario; el 31 de enero vence el último día de febrero
                "expires_at": now + relativedelta(months=1),
            }, commit=False)
            user_repository.update(
                db, db_obj=user, obj_in={"membership_status": MembershipStatus.ACTIVE.value}, commit=False
            )
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(payment)

        logger.info(f"Pago {payment.id} registrado; membresía del usuario {user.id} activada")
        return payment


payment_service = PaymentService()
