# app/services/auth_service.py

import logging

from sqlalchemy.orm import Session

from app.controllers.internal import user_controller
from app.core import security
from app.core.exceptions import (
    AuthenticationError,
    ConflictError,
    PermissionDeniedError,
)
from app.models.internal_model import ROLE_CUSTOMER, User
from app.schemas.auth_schemas import LoginRequest, RegisterRequest
from app.schemas.user_schemas import AuthResponseSchema, UserProfileSchema

log = logging.getLogger(__name__)


class AuthService:

    def register(self, db: Session, data: RegisterRequest) -> AuthResponseSchema:
        if user_controller.get_by_phone(db, phone_number=data.phone_number):
            raise ConflictError("auth.phoneAlreadyRegistered")
        if data.email and user_controller.get_by_email(db, email=data.email):
            raise ConflictError("auth.emailAlreadyRegistered")

        user = user_controller.create_with_password(
            db,
            data=data,
            password_hash=security.get_password_hash(data.password),
            role=ROLE_CUSTOMER,
        )
        db.commit()
        db.refresh(user)
        log.info("User %s registered", user.id)
        return self._auth_response(user)

    def login(self, db: Session, data: LoginRequest) -> AuthResponseSchema:
        user = user_controller.get_by_phone(db, phone_number=data.phone_number)
        if not user or not security.verify_password(data.password, user.password_hash):
            raise AuthenticationError("auth.invalidPhoneOrPassword")
        if not user.is_active:
            raise PermissionDeniedError("auth.accountDeactivated")
        return self._auth_response(user)

    @staticmethod
    def _auth_response(user: User) -> AuthResponseSchema:
        return AuthResponseSchema(
            access_token=security.create_access_token(user),
            user=UserProfileSchema.model_validate(user),
        )


auth_service = AuthService()
