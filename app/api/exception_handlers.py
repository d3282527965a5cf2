# app/api/exception_handlers.py

import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import AppError, InternalError
from app.core.i18n import get_language, translate

log = logging.getLogger(__name__)

HTTP_STATUS_KEYS = {
    status.HTTP_400_BAD_REQUEST: "common.validationError",
    status.HTTP_401_UNAUTHORIZED: "common.unauthorized",
    status.HTTP_403_FORBIDDEN: "common.forbidden",
    status.HTTP_404_NOT_FOUND: "common.notFound",
    status.HTTP_409_CONFLICT: "common.conflict",
}


def error_response(
    status_code: int,
    message: str,
    key: Optional[str] = None,
    errors: Optional[Dict[str, List[str]]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    content = {"success": False, "message": message}
    if key:
        content["key"] = key
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    language = get_language(request)
    if isinstance(exc, InternalError):
        log.error("Internal error %s on %s %s", exc.key, request.method, request.url.path)
        return error_response(
            exc.status_code, translate("common.serverError", language), "common.serverError"
        )

    errors = getattr(exc, "errors", None)
    if errors:
        errors = {
            field: [translate(message, language) for message in messages]
            for field, messages in errors.items()
        }
    return error_response(
        exc.status_code,
        translate(exc.key, language, exc.params),
        exc.key,
        errors,
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(location) or "body"
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        translate("common.validationError", get_language(request)),
        "common.validationError",
        errors,
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    key = HTTP_STATUS_KEYS.get(exc.status_code)
    if isinstance(exc.detail, str) and exc.detail:
        message = exc.detail
    else:
        message = translate(key or "common.error", get_language(request))
    return error_response(exc.status_code, message, key, headers=exc.headers)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        translate("common.serverError", get_language(request)),
        "common.serverError",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
