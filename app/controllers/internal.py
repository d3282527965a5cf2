# app/controllers/internal.py

from typing import List, Optional

from sqlalchemy import or_, update
from sqlalchemy.orm import Session

from app.controllers.base import BaseController
from app.models.internal_model import Address, User
from app.schemas.address_schema import AddressCreateSchema, AddressUpdateSchema
from app.schemas.auth_schemas import RegisterRequest
from app.schemas.user_schemas import UserRoleUpdateSchema


class UserController(BaseController[User, RegisterRequest, UserRoleUpdateSchema]):
    """
    Controller for handling User model operations.
    """

    def get_by_phone(self, db: Session, *, phone_number: str) -> Optional[User]:
        """
        Retrieves a user by their unique phone number.
        """
        return (
            db.query(self._model)
            .filter(self._model.phone_number == phone_number)
            .first()
        )

    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return (
            db.query(self._model)
            .filter(self._model.email == email.lower())
            .first()
        )

    def get_by_phone_or_email(self, db: Session, *, user_credential: str):
        return (
            db.query(self._model)
            .filter(
                or_(
                    self._model.phone_number == user_credential,
                    self._model.email == user_credential.lower(),
                )
            )
            .first()
        )

    def create_with_password(
        self, db: Session, *, data: RegisterRequest, password_hash: str, **extra_fields
    ) -> User:
        """
        Creates a new user. This method does NOT commit the session.
        """
        db_user = User(
            phone_number=data.phone_number,
            email=data.email.lower() if data.email else None,
            first_name=data.first_name,
            last_name=data.last_name,
            password_hash=password_hash,
            **extra_fields,
        )
        db.add(db_user)
        db.flush()
        db.refresh(db_user)
        return db_user


# Instantiate the controller classes to be used in your API endpoints
user_controller = UserController(User)


class AddressController(BaseController[Address, AddressCreateSchema, AddressUpdateSchema]):
    """
    Controller for handling Address model operations.
    """

    def list_for_user(self, db: Session, *, user_id: str) -> List[Address]:
        return (
            db.query(self._model)
            .filter(self._model.user_id == user_id)
            .order_by(self._model.is_default.desc(), self._model.created_at.desc())
            .all()
        )

    def get_for_user(
        self, db: Session, *, address_id: str, user_id: str
    ) -> Optional[Address]:
        return (
            db.query(self._model)
            .filter(self._model.id == address_id, self._model.user_id == user_id)
            .first()
        )

    def clear_default(
        self, db: Session, *, user_id: str, except_id: Optional[str] = None
    ) -> None:
        statement = update(self._model).where(
            self._model.user_id == user_id, self._model.is_default.is_(True)
        )
        if except_id:
            statement = statement.where(self._model.id != except_id)
        db.execute(
            statement.values(is_default=False).execution_options(
                synchronize_session="fetch"
            )
        )


address_controller = AddressController(Address)
