# app/services/order_service.py

import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Query, Session, selectinload

from app.controllers.cart_controller import cart_controller
from app.controllers.internal import address_controller
from app.controllers.order_controller import generate_order_number, order_controller
from app.controllers.product_controller import product_controller
from app.core.config import settings
from app.core.exceptions import (
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationFailedError,
)
from app.models.order_models import (
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)
from app.schemas.order_schemas import (
    CheckoutItemSchema,
    CheckoutSummarySchema,
    PlaceOrderRequest,
    ShippingAddressSnapshot,
)
from app.services.cart_service import cart_subtotal, coupon_discount

log = logging.getLogger(__name__)

ORDER_NUMBER_ATTEMPTS = 5
CANCELLABLE_STATUSES = {OrderStatus.PENDING.value, OrderStatus.CONFIRMED.value}

# Status an admin may move an order to, per current status
STATUS_TRANSITIONS = {
    OrderStatus.PENDING.value: {OrderStatus.CONFIRMED.value, OrderStatus.CANCELLED.value},
    OrderStatus.CONFIRMED.value: {
        OrderStatus.PROCESSING.value,
        OrderStatus.CANCELLED.value,
    },
    OrderStatus.PROCESSING.value: {OrderStatus.SHIPPED.value},
    OrderStatus.SHIPPED.value: {OrderStatus.DELIVERED.value},
    OrderStatus.DELIVERED.value: set(),
    OrderStatus.CANCELLED.value: set(),
}


class OrderService:

    def checkout_summary(self, db: Session, user_id: str) -> CheckoutSummarySchema:
        cart_controller.get_or_create(db, user_id=user_id)
        db.commit()
        cart = cart_controller.get_by_user(db, user_id=user_id)

        items = []
        for item in cart.items:
            product = item.product
            price = Decimal(item.price)
            items.append(
                CheckoutItemSchema(
                    product_id=item.product_id,
                    name=product.name if product else "Unknown Product",
                    name_ar=product.name_ar if product else None,
                    image=product.images[0] if product and product.images else None,
                    quantity=item.quantity,
                    price=price,
                    total_price=price * item.quantity,
                )
            )

        subtotal = cart_subtotal(cart)
        discount = coupon_discount(cart.coupon, subtotal)
        shipping_cost = Decimal(str(settings.SHIPPING_COST)) if cart.items else Decimal("0")
        return CheckoutSummarySchema(
            items=items,
            subtotal=subtotal,
            shipping_cost=shipping_cost,
            discount=discount,
            total=max(Decimal("0"), subtotal + shipping_cost - discount),
            item_count=sum(item.quantity for item in cart.items),
        )

    def place_order(self, db: Session, user_id: str, data: PlaceOrderRequest) -> Order:
        """
        Turns the cart into an order in one transaction: snapshots items and
        address, decrements stock line by line and empties the cart. A line
        whose stock ran out in the meantime aborts the whole order.
        """
        cart = cart_controller.get_by_user(db, user_id=user_id)
        if cart is None or not cart.items:
            raise ValidationFailedError("order.emptyCart")

        address = address_controller.get_for_user(
            db, address_id=data.address_id, user_id=user_id
        )
        if address is None:
            raise NotFoundError("order.addressNotFound")

        for item in cart.items:
            product = item.product
            if product is None or not product.is_active:
                raise NotFoundError("order.productNotFound")
            if not product.in_stock or product.stock_quantity < item.quantity:
                raise ConflictError("order.productOutOfStock", name=product.name)

        subtotal = cart_subtotal(cart)
        discount = coupon_discount(cart.coupon, subtotal)
        shipping_cost = Decimal(str(settings.SHIPPING_COST))

        order = Order(
            order_number=self._new_order_number(db),
            user_id=user_id,
            shipping_address=ShippingAddressSnapshot(
                name=address.name,
                phone=address.phone,
                city=address.city,
                area=address.area,
                street=address.street,
                landmark=address.landmark,
                apartment_number=address.apartment_number,
            ).model_dump(),
            payment_method=PaymentMethod(data.payment_method).value,
            payment_status=PaymentStatus.PENDING.value,
            status=OrderStatus.PENDING.value,
            subtotal=subtotal,
            shipping_cost=shipping_cost,
            discount=discount,
            total=max(Decimal("0"), subtotal + shipping_cost - discount),
            coupon=cart.coupon,
            notes=data.notes,
        )
        for item in cart.items:
            price = Decimal(item.price)
            order.items.append(
                OrderItem(
                    product_id=item.product_id,
                    product_name=item.product.name,
                    product_name_ar=item.product.name_ar,
                    product_image=item.product.images[0] if item.product.images else None,
                    quantity=item.quantity,
                    price=price,
                    total_price=price * item.quantity,
                )
            )
        db.add(order)
        db.flush()

        for item in cart.items:
            if not product_controller.change_stock(db, item.product_id, -item.quantity):
                name = item.product.name
                db.rollback()
                log.info("Order for user %s aborted, %s ran out of stock", user_id, name)
                raise ConflictError("order.productOutOfStock", name=name)

        cart_controller.clear(db, cart=cart)
        db.commit()
        db.refresh(order)
        log.info("Order %s placed by user %s", order.order_number, user_id)
        return order

    def orders_query(self, db: Session, user_id: str) -> Query:
        return order_controller.get_cursor_query(
            db, order_controller.query_for_user(db, user_id=user_id)
        )

    def get_order(self, db: Session, user_id: str, order_id: str) -> Order:
        order = order_controller.get_for_user(db, order_id=order_id, user_id=user_id)
        if order is None:
            raise NotFoundError("order.orderNotFound")
        return order

    def cancel_order(self, db: Session, user_id: str, order_id: str) -> Order:
        order = self.get_order(db, user_id, order_id)
        if order.status not in CANCELLABLE_STATUSES:
            raise ValidationFailedError("order.cannotCancel")
        self._cancel(db, order)
        db.commit()
        db.refresh(order)
        log.info("Order %s cancelled by its owner", order.order_number)
        return order

    # --- Admin ---

    def admin_query(self, db: Session, status: Optional[str] = None) -> Query:
        query = db.query(Order).options(selectinload(Order.items))
        if status:
            query = query.filter(Order.status == status)
        return order_controller.get_cursor_query(db, query)

    def admin_get(self, db: Session, order_id: str) -> Order:
        order = order_controller.get(db, order_id)
        if order is None:
            raise NotFoundError("order.orderNotFound")
        return order

    def update_status(self, db: Session, order_id: str, status: OrderStatus) -> Order:
        order = self.admin_get(db, order_id)
        new_status = OrderStatus(status).value
        if new_status not in STATUS_TRANSITIONS.get(order.status, set()):
            raise ValidationFailedError("order.invalidOrderStatus")

        if new_status == OrderStatus.CANCELLED.value:
            self._cancel(db, order)
        else:
            order.status = new_status
            if (
                new_status == OrderStatus.DELIVERED.value
                and order.payment_method == PaymentMethod.COD.value
            ):
                order.payment_status = PaymentStatus.PAID.value
        db.commit()
        db.refresh(order)
        log.info("Order %s moved to %s", order.order_number, new_status)
        return order

    def update_payment_status(
        self, db: Session, order_id: str, payment_status: PaymentStatus
    ) -> Order:
        order = self.admin_get(db, order_id)
        order.payment_status = PaymentStatus(payment_status).value
        db.commit()
        db.refresh(order)
        return order

    # --- Helpers ---

    @staticmethod
    def _cancel(db: Session, order: Order) -> None:
        for item in order.items:
            # The product may have been deleted since, nothing to restore then
            if item.product_id:
                product_controller.change_stock(db, item.product_id, item.quantity)
        order.status = OrderStatus.CANCELLED.value
        if order.payment_status == PaymentStatus.PAID.value:
            order.payment_status = PaymentStatus.REFUNDED.value

    @staticmethod
    def _new_order_number(db: Session) -> str:
        for _ in range(ORDER_NUMBER_ATTEMPTS):
            order_number = generate_order_number()
            if not order_controller.order_number_exists(db, order_number):
                return order_number
        raise InternalError()


order_service = OrderService()
