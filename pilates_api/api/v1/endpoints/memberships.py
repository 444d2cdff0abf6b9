from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pilates_api.core.auth import require_roles
from pilates_api.db.session import get_db
from pilates_api.models.user import User, UserRole
from pilates_api.schemas.user import MembershipUpdate, User as UserSchema
from pilates_api.services.user import user_service

router = APIRouter()


@router.put("/memberships/{user_id}", response_model=UserSchema)
def update_membership(
    user_id: int,
    membership_in: MembershipUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.ADMIN)),
) -> Any:
    """
    Fijar el estado de la membresía y, opcionalmente, su vencimiento. Solo administradores.
    """
    return user_service.update_membership(db, user_id, membership_in)
