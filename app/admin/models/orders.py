from sqladmin.filters import AllUniqueStringValuesFilter

from app.admin.models.base import BaseAdmin
from app.models.order_models import Order


class OrderAdmin(BaseAdmin, model=Order):
    name = "Order"
    name_plural = "Orders"
    can_create = False
    column_exclude_list = [
        "shipping_address",
        "notes",
    ]

    column_searchable_list = (Order.order_number,)

    column_sortable_list = (
        Order.order_number,
        Order.status,
        Order.total,
        Order.created_at,
    )

    column_filters = (
        AllUniqueStringValuesFilter(Order.status),
        AllUniqueStringValuesFilter(Order.payment_status),
    )
