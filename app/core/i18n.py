# app/core/i18n.py

import logging
import re
from typing import Any, Dict, Optional

from starlette.types import ASGIApp, Message, Receive, Scope, Send
from starlette.requests import Request

from app.core.config import settings
from app.locales.ar import ar
from app.locales.en import en

log = logging.getLogger(__name__)

translations: Dict[str, Dict[str, Any]] = {
    "en": en,
    "ar": ar,
}

DEFAULT_LANGUAGE = settings.DEFAULT_LANGUAGE
SUPPORTED_LANGUAGES = [lang for lang in settings.SUPPORTED_LANGUAGES if lang in translations]


def is_supported(language: Optional[str]) -> bool:
    return bool(language) and language in SUPPORTED_LANGUAGES


def _lookup(catalog: Dict[str, Any], key: str) -> Optional[str]:
    current: Any = catalog
    for part in key.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
    return current if isinstance(current, str) else None


def translate(
    key: str, language: str = DEFAULT_LANGUAGE, params: Optional[Dict[str, Any]] = None
) -> str:
    """
    Translates a dot-notation key (``category.categoryNotFound``).

    Unknown languages fall back to the default language, unknown keys
    to the key itself. ``{name}`` placeholders are filled from ``params``.
    """
    catalog = translations.get(language)
    if catalog is None:
        log.warning("Language '%s' not found, using default", language)
        catalog = translations[DEFAULT_LANGUAGE]

    message = _lookup(catalog, key)
    if message is None and language != DEFAULT_LANGUAGE:
        message = _lookup(translations[DEFAULT_LANGUAGE], key)
    if message is None:
        log.warning("Translation key '%s' not found for language '%s'", key, language)
        return key

    for param_key, param_value in (params or {}).items():
        message = re.sub(r"\{" + re.escape(param_key) + r"\}", str(param_value), message)
    return message


def parse_accept_language(header: Optional[str]) -> str:
    """
    Picks the best supported language from an Accept-Language header,
    e.g. ``en-US,en;q=0.9,ar;q=0.8``.
    """
    if not header:
        return DEFAULT_LANGUAGE

    candidates = []
    for part in header.split(","):
        pieces = part.strip().split(";")
        code = pieces[0].split("-")[0].strip().lower()
        quality = 1.0
        if len(pieces) > 1 and "=" in pieces[1]:
            try:
                quality = float(pieces[1].split("=", 1)[1])
            except ValueError:
                quality = 0.0
        candidates.append((code, quality))

    candidates.sort(key=lambda item: item[1], reverse=True)
    for code, _ in candidates:
        if is_supported(code):
            return code
    return DEFAULT_LANGUAGE


def detect_language(request: Request) -> str:
    """
    Detection order: ``?lang=``, ``X-Language`` header, ``Accept-Language``,
    then the default language.
    """
    query_lang = request.query_params.get("lang")
    if is_supported(query_lang):
        return query_lang

    header_lang = request.headers.get("x-language")
    if is_supported(header_lang):
        return header_lang

    return parse_accept_language(request.headers.get("accept-language"))


def get_language(request: Request) -> str:
    return getattr(request.state, "language", None) or detect_language(request)


class I18nMiddleware:
    """
    Stores the negotiated language on ``request.state.language`` and sets the
    ``Content-Language`` response header.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        language = detect_language(request)
        scope.setdefault("state", {})["language"] = language

        async def send_with_language(message: Message):
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((b"content-language", language.encode("latin-1")))
                message["headers"] = headers
            await send(message)

        await self.app(scope, receive, send_with_language)
