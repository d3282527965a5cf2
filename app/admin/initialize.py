from typing import Optional

from sqladmin import Admin

from app.admin.models.base import AdminAuth
from app.admin.models.catalog import CategoryAdmin, ProductAdmin
from app.admin.models.orders import OrderAdmin
from app.admin.models.users import UserAdmin
from app.controllers.internal import user_controller
from app.core.config import settings
from app.core.database import SessionLocal

ADMIN_VIEWS = (UserAdmin, CategoryAdmin, ProductAdmin, OrderAdmin)

_admin: Optional[Admin] = None


def initialize_admin_page(app, engine) -> Admin:
    """Mounts the sqladmin panel on ``/admin`` once per process."""
    global _admin
    if _admin is None:
        _admin = Admin(
            app=app,
            engine=engine,
            title=f"{settings.PROJECT_NAME} admin",
            authentication_backend=AdminAuth(
                secret_key=settings.SECRET_KEY,
                session_factory=SessionLocal,
                user_controller=user_controller,
            ),
        )
        for view in ADMIN_VIEWS:
            _admin.add_view(view)
    return _admin
