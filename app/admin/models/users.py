from sqladmin.filters import AllUniqueStringValuesFilter, BooleanFilter

from app.admin.models.base import BaseAdmin
from app.models.internal_model import User


class UserAdmin(BaseAdmin, model=User):
    name = "User"
    name_plural = "Users"
    column_exclude_list = [
        "password_hash",
    ]
    form_excluded_columns = [
        User.password_hash,
        User.cart,
        User.orders,
        User.addresses,
    ]

    column_searchable_list = (
        User.phone_number,
        User.email,
        User.last_name,
    )

    column_sortable_list = (
        User.phone_number,
        User.email,
        User.created_at,
        User.updated_at,
    )

    column_filters = (
        AllUniqueStringValuesFilter(User.role),
        BooleanFilter(User.is_active),
    )
