# app/api/v1/endpoints/auth.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core import security
from app.core.database import get_db
from app.models.internal_model import User
from app.schemas.auth_schemas import LoginRequest, RegisterRequest
from app.schemas.user_schemas import AuthResponseSchema, UserProfileSchema
from app.services.auth_service import auth_service

# We'll use a router for each major group of endpoints
router = APIRouter(prefix="/auth")


@router.post(
    "/register", response_model=AuthResponseSchema, status_code=status.HTTP_201_CREATED
)
async def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """
    Creates a customer account and logs it in right away.
    """
    return auth_service.register(db, data)


@router.post("/login", response_model=AuthResponseSchema)
async def login(data: LoginRequest, db: Session = Depends(get_db)):
    """
    Phone number and password login, returns a bearer access token.
    """
    return auth_service.login(db, data)


@router.get("/me", response_model=UserProfileSchema)
async def read_users_me(current_user: User = Depends(security.get_current_user)):
    """
    Get the profile of the currently authenticated user.
    """
    return current_user
