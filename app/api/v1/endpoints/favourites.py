from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.responses import message_response
from app.core import security
from app.core.database import get_db
from app.models.internal_model import User
from app.schemas.basic_schemas import MessageResponse
from app.schemas.favourite_schemas import (
    FavouriteCountSchema,
    FavouritesSchema,
    FavouriteStatusSchema,
)
from app.services.favourite_service import favourite_service

router = APIRouter(prefix="/favourites")


@router.get("", response_model=FavouritesSchema)
async def get_favourites(
    db: Session = Depends(get_db),
    current_user: User = Depends(security.get_current_user),
):
    return favourite_service.list_favourites(db, current_user.id)


@router.get("/count", response_model=FavouriteCountSchema)
async def count_favourites(
    db: Session = Depends(get_db),
    current_user: User = Depends(security.get_current_user),
):
    return favourite_service.count(db, current_user.id)


@router.get("/check/{product_id}", response_model=FavouriteStatusSchema)
async def check_favourite(
    product_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(security.get_current_user),
):
    return favourite_service.check(db, current_user.id, product_id)


@router.post("/{product_id}", response_model=FavouritesSchema)
async def add_favourite(
    product_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(security.get_current_user),
):
    return favourite_service.add(db, current_user.id, product_id)


@router.delete("/{product_id}", response_model=FavouritesSchema)
async def remove_favourite(
    product_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(security.get_current_user),
):
    return favourite_service.remove(db, current_user.id, product_id)


@router.delete("", response_model=MessageResponse)
async def clear_favourites(
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(security.get_current_user),
):
    favourite_service.clear(db, current_user.id)
    return message_response(request, "favourite.cleared")
