from sqlalchemy.orm import Session

from app.controllers.favourite_controller import favourite_controller
from app.controllers.product_controller import product_controller
from app.core.exceptions import NotFoundError
from app.models.favourite_models import Favourite
from app.schemas.favourite_schemas import (
    FavouriteCountSchema,
    FavouritesSchema,
    FavouriteStatusSchema,
)
from app.schemas.product_schemas import ProductSchema


class FavouriteService:

    def list_favourites(self, db: Session, user_id: str) -> FavouritesSchema:
        products = favourite_controller.list_products(db, user_id=user_id)
        products = [p for p in products if p is not None and p.is_active]
        return FavouritesSchema(
            products=[ProductSchema.model_validate(p) for p in products],
            count=len(products),
        )

    def add(self, db: Session, user_id: str, product_id: str) -> FavouritesSchema:
        """Adding a product that is already a favourite changes nothing."""
        if product_controller.get_active(db, product_id) is None:
            raise NotFoundError("product.productNotFound")
        if favourite_controller.get_entry(db, user_id=user_id, product_id=product_id) is None:
            db.add(Favourite(user_id=user_id, product_id=product_id))
            db.commit()
        return self.list_favourites(db, user_id)

    def remove(self, db: Session, user_id: str, product_id: str) -> FavouritesSchema:
        entry = favourite_controller.get_entry(db, user_id=user_id, product_id=product_id)
        if entry is not None:
            favourite_controller.remove(db, db_obj=entry)
            db.commit()
        return self.list_favourites(db, user_id)

    def clear(self, db: Session, user_id: str) -> None:
        favourite_controller.clear_for_user(db, user_id=user_id)
        db.commit()

    def check(self, db: Session, user_id: str, product_id: str) -> FavouriteStatusSchema:
        entry = favourite_controller.get_entry(db, user_id=user_id, product_id=product_id)
        return FavouriteStatusSchema(product_id=product_id, is_favourite=entry is not None)

    def count(self, db: Session, user_id: str) -> FavouriteCountSchema:
        return FavouriteCountSchema(
            count=favourite_controller.count_for_user(db, user_id=user_id)
        )


favourite_service = FavouriteService()
