# app/core/exceptions.py

from typing import Dict, List, Optional

from fastapi import status


class AppError(Exception):
    """
    Base error raised by services.

    ``key`` is a symbolic translation key (for example
    ``category.categoryNotFound``); the API layer turns it into a localized
    message and ``status_code`` into the HTTP status.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_key: str = "common.error"

    def __init__(self, key: Optional[str] = None, /, **params):
        self.key = key or self.default_key
        self.params = params
        super().__init__(self.key)


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_key = "common.notFound"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_key = "common.conflict"


class ValidationFailedError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_key = "common.validationError"

    def __init__(
        self,
        key: Optional[str] = None,
        /,
        errors: Optional[Dict[str, List[str]]] = None,
        **params,
    ):
        super().__init__(key, **params)
        self.errors = errors or {}


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_key = "auth.unauthorized"


class PermissionDeniedError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_key = "common.forbidden"


class QueryTimeoutError(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_key = "common.queryTimeout"


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_key = "common.serverError"
