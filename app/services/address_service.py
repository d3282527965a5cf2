from typing import List

from sqlalchemy.orm import Session

from app.controllers.internal import address_controller
from app.core.exceptions import NotFoundError
from app.models.internal_model import Address
from app.schemas.address_schema import AddressCreateSchema, AddressUpdateSchema


class AddressService:
    """
    Delivery addresses of a user. At most one of them is the default; the
    first address a user saves becomes the default automatically.
    """

    def list_addresses(self, db: Session, user_id: str) -> List[Address]:
        return address_controller.list_for_user(db, user_id=user_id)

    def get_address(self, db: Session, user_id: str, address_id: str) -> Address:
        address = address_controller.get_for_user(
            db, address_id=address_id, user_id=user_id
        )
        if address is None:
            raise NotFoundError("address.addressNotFound")
        return address

    def create(self, db: Session, user_id: str, data: AddressCreateSchema) -> Address:
        is_default = data.is_default or not address_controller.list_for_user(
            db, user_id=user_id
        )
        if is_default:
            address_controller.clear_default(db, user_id=user_id)
        address = address_controller.create(
            db,
            obj_in=data.model_dump(exclude={"is_default"}),
            user_id=user_id,
            is_default=is_default,
        )
        db.commit()
        db.refresh(address)
        return address

    def update(
        self, db: Session, user_id: str, address_id: str, data: AddressUpdateSchema
    ) -> Address:
        address = self.get_address(db, user_id, address_id)
        values = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key in ("landmark", "apartment_number")
        }
        if values.get("is_default"):
            address_controller.clear_default(db, user_id=user_id, except_id=address.id)
        address = address_controller.update(db, db_obj=address, obj_in=values)
        db.commit()
        db.refresh(address)
        return address

    def set_default(self, db: Session, user_id: str, address_id: str) -> Address:
        address = self.get_address(db, user_id, address_id)
        address_controller.clear_default(db, user_id=user_id, except_id=address.id)
        address.is_default = True
        db.commit()
        db.refresh(address)
        return address

    def delete(self, db: Session, user_id: str, address_id: str) -> None:
        address = self.get_address(db, user_id, address_id)
        was_default = address.is_default
        address_controller.remove(db, db_obj=address)
        if was_default:
            remaining = address_controller.list_for_user(db, user_id=user_id)
            if remaining:
                remaining[0].is_default = True
        db.commit()


address_service = AddressService()
