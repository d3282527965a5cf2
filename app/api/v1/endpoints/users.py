from fastapi import APIRouter, Depends
from fastapi_pagination.ext.sqlalchemy import paginate
from sqlalchemy.orm import Session

from app.controllers.internal import user_controller
from app.core import security
from app.core.database import get_db
from app.core.exceptions import NotFoundError, ValidationFailedError
from app.models.internal_model import ROLE_ADMIN, ROLE_CUSTOMER, User
from app.pagination.cursor_pagination import (
    HistoryPage,
    HistoryCursorParams,
)
from app.schemas.user_schemas import UserProfileSchema, UserRoleUpdateSchema

router = APIRouter(prefix="/admin/users")


@router.get("", response_model=HistoryPage[UserProfileSchema])
async def list_users(
    db: Session = Depends(get_db),
    params: HistoryCursorParams = Depends(),
    current_admin: User = Depends(security.get_current_admin),
):
    query = user_controller.get_cursor_query(db=db)
    return paginate(db, query, params)


@router.patch("/{user_id}", response_model=UserProfileSchema)
async def update_user(
    user_id: str,
    data: UserRoleUpdateSchema,
    db: Session = Depends(get_db),
    current_admin: User = Depends(security.get_current_admin),
):
    """
    Changes the role or the active flag of a user.
    """
    user = user_controller.get(db, user_id)
    if not user:
        raise NotFoundError("auth.userNotFound")
    if data.role is not None and data.role not in (ROLE_ADMIN, ROLE_CUSTOMER):
        raise ValidationFailedError(errors={"role": ["Unknown role"]})

    values = data.model_dump(exclude_unset=True, exclude_none=True)
    user = user_controller.update(db, db_obj=user, obj_in=values)
    db.commit()
    db.refresh(user)
    return user
