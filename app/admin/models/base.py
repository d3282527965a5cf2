import logging
from typing import Optional

from sqladmin.authentication import AuthenticationBackend
from sqladmin.models import ModelView, ModelViewMeta
from sqlalchemy import inspect
from starlette.requests import Request

from app.core import security
from app.models.internal_model import User

log = logging.getLogger(__name__)

# Never shown in any admin list or form
HIDDEN_COLUMNS = {"password_hash"}
READ_ONLY_COLUMNS = ("created_at", "updated_at")
SESSION_KEY = "admin_user_id"


def _keys(columns) -> set:
    """Column names of a list mixing strings and mapped attributes."""
    return {c if isinstance(c, str) else c.key for c in columns or ()}


class BaseAdminMeta(ModelViewMeta):
    """
    Fills in the list columns from the mapped model when a view does not
    declare them, and orders rows newest first when the model is timestamped.
    """

    def __new__(mcls, name, bases, attrs, **kwargs):
        cls = super().__new__(mcls, name, bases, attrs, **kwargs)

        model = getattr(cls, "model", None)
        if model is None:
            return cls

        column_keys = [column.key for column in inspect(model).columns]
        hidden = HIDDEN_COLUMNS | _keys(getattr(cls, "column_exclude_list", None))

        if not getattr(cls, "column_list", None):
            cls.column_list = [key for key in column_keys if key not in hidden]
        if not getattr(cls, "column_default_sort", None) and "created_at" in column_keys:
            cls.column_default_sort = [("created_at", True)]

        excluded_from_form = _keys(getattr(cls, "form_excluded_columns", None))
        excluded_from_form.update(HIDDEN_COLUMNS & set(column_keys))
        excluded_from_form.update(c for c in READ_ONLY_COLUMNS if c in column_keys)
        cls.form_excluded_columns = sorted(excluded_from_form)
        return cls


class BaseAdmin(ModelView, metaclass=BaseAdminMeta):
    column_list = None
    page_size = 50


class AdminAuth(AuthenticationBackend):
    """
    Session based login for the admin panel. The login field accepts a
    phone number or an e-mail; only active admins get in, and the role is
    checked again on every request.
    """

    def __init__(self, secret_key: str, session_factory, user_controller):
        super().__init__(secret_key=secret_key)
        self._session_factory = session_factory
        self._user_controller = user_controller

    @staticmethod
    def _can_use_panel(user: Optional[User]) -> bool:
        return user is not None and user.is_active and user.is_admin

    async def login(self, request: Request) -> bool:
        form = await request.form()
        credential = (form.get("username") or "").strip()
        password = form.get("password") or ""
        if not credential or not password:
            return False

        with self._session_factory() as db:
            user = self._user_controller.get_by_phone_or_email(
                db, user_credential=credential
            )
            if user is None or not security.verify_password(password, user.password_hash):
                return False
            if not self._can_use_panel(user):
                log.warning("Non admin user %s tried to open the admin panel", user.id)
                return False
            request.session[SESSION_KEY] = user.id
        return True

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        user_id = request.session.get(SESSION_KEY)
        if not user_id:
            return False

        with self._session_factory() as db:
            allowed = self._can_use_panel(self._user_controller.get(db, user_id))
        if not allowed:
            request.session.clear()
        return allowed
