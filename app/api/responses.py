from typing import Any, Optional

from fastapi import Request

from app.core.i18n import get_language, translate
from app.schemas.basic_schemas import MessageResponse


def message_response(
    request: Request, key: str, data: Optional[Any] = None, **params
) -> MessageResponse:
    """Success envelope with a message translated to the request language."""
    return MessageResponse(
        success=True,
        message=translate(key, get_language(request), params),
        data=data,
    )
