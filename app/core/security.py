import datetime
import logging
import uuid
from typing import Optional

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import AuthenticationError, PermissionDeniedError
from app.models.internal_model import User

log = logging.getLogger(__name__)

# Password hashing configuration
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# JWT token settings
JWT_SECRET_KEY = settings.SECRET_KEY
JWT_ALGORITHM = settings.ALGORITHM


# Security scheme for requiring authorization. Missing credentials are
# reported by the dependencies below, not by the scheme itself.
security = HTTPBearer(auto_error=False)


def get_password_hash(password: str) -> str:
    """Hashes a password using bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verifies a plain password against a hashed password."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    user: User, access_token_expire_minutes: Optional[int] = None
) -> str:
    """
    Creates a signed access token for ``user``.

    Args:
        user (User): The authenticated user.
        access_token_expire_minutes (Optional[int]): Custom expiry for the token.

    Returns:
        str: The encoded JWT.
    """
    if access_token_expire_minutes is None:
        access_token_expire_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES

    expires = datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(
        minutes=access_token_expire_minutes
    )
    payload = {
        "sub": str(user.id),
        "role": user.role,
        "jti": str(uuid.uuid4()),
        "exp": expires,
        "type": "access",
    }
    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def _user_from_token(db: Session, token: str) -> User:
    try:
        payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise AuthenticationError("auth.tokenExpired")
    except JWTError:
        raise AuthenticationError("auth.invalidToken")

    if payload.get("type") != "access" or not payload.get("sub"):
        raise AuthenticationError("auth.invalidToken")

    user = db.get(User, payload["sub"])
    if user is None:
        raise AuthenticationError("auth.userNotFound")
    if not user.is_active:
        raise AuthenticationError("auth.accountDeactivated")
    return user


async def get_current_user(
    db: Session = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
) -> User:
    """
    Dependency to get the current user from a bearer token.

    Raises:
        AuthenticationError: If the token is missing, invalid or expired, or
            the user no longer exists or was deactivated.
    """
    if credentials is None:
        raise AuthenticationError("auth.unauthorized")
    return _user_from_token(db, credentials.credentials)


async def get_current_user_optional(
    db: Session = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
) -> Optional[User]:
    """Same as ``get_current_user`` but anonymous requests get ``None``."""
    if credentials is None:
        return None
    try:
        return _user_from_token(db, credentials.credentials)
    except AuthenticationError as e:
        log.debug("Ignoring bad optional credentials: %s", e.key)
        return None


async def get_current_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise PermissionDeniedError("auth.adminAccessRequired")
    return current_user
