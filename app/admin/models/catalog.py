from sqladmin.filters import BooleanFilter

from app.admin.models.base import BaseAdmin
from app.models.category_models import Category
from app.models.product_models import Product


class CategoryAdmin(BaseAdmin, model=Category):
    name = "Category"
    name_plural = "Categories"
    can_create = False
    can_edit = False

    column_searchable_list = (
        Category.name,
        Category.slug,
    )

    column_sortable_list = (
        Category.name,
        Category.is_active,
        Category.created_at,
    )

    column_filters = (BooleanFilter(Category.is_active),)


class ProductAdmin(BaseAdmin, model=Product):
    name = "Product"
    name_plural = "Products"
    can_create = False
    can_edit = False
    column_exclude_list = [
        "description",
        "description_ar",
        "supplier_notes",
    ]

    column_searchable_list = (
        Product.name,
        Product.slug,
        Product.sku,
    )

    column_sortable_list = (
        Product.name,
        Product.price,
        Product.stock_quantity,
        Product.views,
        Product.created_at,
    )

    column_filters = (
        BooleanFilter(Product.is_active),
        BooleanFilter(Product.in_stock),
        BooleanFilter(Product.is_featured),
    )
