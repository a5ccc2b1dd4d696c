"""
Order Service.

Creates and updates priced orders. Every write of the line items:
1. checks that there is at least one line
2. resolves each product among active products (404 on the first missing one)
3. rejects quantities below 1
4. copies the current product price into the line (snapshot)
5. recomputes subtotal and total (subtotal * 1.16, half-up to the cent)

Nothing is persisted when any line fails. Stock quantities are not touched.

Usage:
    from rest_api.services.domain import OrderService

    service = OrderService(db)
    order = service.create(user_id, [OrderLineRequest(product_id=pid, quantity=2)])
    service.cancel(order.id)
"""

from __future__ import annotations

from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from rest_api.models import Order, OrderItem, Product
from rest_api.services.base_service import BaseService
from rest_api.services.crud.repository import BaseRepository
from rest_api.services.domain.product_service import ProductService
from shared.config.constants import Limits, OrderStatus
from shared.config.logging import orders_logger as logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import (
    DatabaseError,
    InvalidStatusError,
    NotFoundError,
    ValidationError,
)
from shared.utils.money import cents_to_amount, compute_totals
from shared.utils.schemas import OrderLineOutput, OrderLineRequest, OrderOutput


class OrderService(BaseService[Order]):
    """
    Service for order pricing and lifecycle.

    Business rules:
    - an order always has at least one line
    - line prices are snapshots, later product edits do not change them
    - status must be one of pending, paid, cancelled; any transition is allowed
    - cancelling always writes and always succeeds for an existing order
    """

    def __init__(self, db: Session):
        super().__init__(db, Order)
        self._products = BaseRepository(Product, db)
        self._product_output = ProductService(db).to_output

    @staticmethod
    def _load_options() -> list:
        return [selectinload(Order.items).joinedload(OrderItem.product)]

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get(self, order_id: str) -> OrderOutput:
        return self.to_output(self._get_order(order_id))

    def list_orders(
        self,
        *,
        status: str | None = None,
        user_id: str | None = None,
        limit: int = Limits.DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> list[OrderOutput]:
        """
        List orders, oldest first.

        Args:
            status: Only orders in this status.
            user_id: Only orders owned by this user.
            limit: Maximum results (capped at MAX_PAGE_SIZE).
            offset: Skip count.
        """
        limit = min(max(1, limit), Limits.MAX_PAGE_SIZE)
        offset = max(0, offset)

        conditions = []
        if status:
            self._validate_status(status)
            conditions.append(Order.status == status)
        if user_id:
            conditions.append(Order.user_id == user_id)

        orders = self._repo.find_all(
            *conditions,
            options=self._load_options(),
            order_by=Order.created_at,
            limit=limit,
            offset=offset,
        )
        return [self.to_output(o) for o in orders]

    # =========================================================================
    # Commands
    # =========================================================================

    def create(
        self,
        user_id: str,
        lines: Sequence[OrderLineRequest],
        status: str | None = None,
    ) -> OrderOutput:
        """
        Price and persist a new order.

        Raises:
            ValidationError: Empty line list, quantity < 1 or invalid status.
            NotFoundError: A referenced product does not exist or is inactive.
        """
        if status:
            self._validate_status(status)

        items, subtotal_cents, total_cents = self._price_lines(lines)

        order = Order(
            user_id=user_id,
            items=items,
            subtotal_cents=subtotal_cents,
            total_cents=total_cents,
            status=status or OrderStatus.PENDING,
        )
        self._db.add(order)
        self._commit("create order")

        logger.info(
            "Order created",
            order_id=order.id,
            user_id=user_id,
            lines=len(items),
            total_cents=total_cents,
        )
        return self.get(order.id)

    def update(
        self,
        order_id: str,
        *,
        user_id: str | None = None,
        lines: Sequence[OrderLineRequest] | None = None,
        status: str | None = None,
    ) -> OrderOutput:
        """
        Update owner, lines and/or status of an order.

        New lines fully replace the old ones and totals are recomputed.

        Raises:
            NotFoundError: Unknown order or product.
            ValidationError: Empty line list, quantity < 1 or invalid status.
        """
        order = self._get_order(order_id)

        if status:
            self._validate_status(status)

        if lines is not None:
            items, subtotal_cents, total_cents = self._price_lines(lines)
            order.items = items
            order.subtotal_cents = subtotal_cents
            order.total_cents = total_cents

        if user_id:
            order.user_id = user_id
        if status:
            order.status = status
        order.touch()

        self._commit("update order")

        logger.info("Order updated", order_id=order_id, status=order.status)
        return self.get(order_id)

    def cancel(self, order_id: str) -> OrderOutput:
        """
        Set the order status to cancelled.

        Repeating the call rewrites the same state and succeeds again.
        """
        order = self._get_order(order_id)
        order.status = OrderStatus.CANCELLED
        order.touch()
        self._commit("cancel order")

        logger.info("Order cancelled", order_id=order_id)
        return self.get(order_id)

    # =========================================================================
    # Transformation
    # =========================================================================

    def to_output(self, order: Order) -> OrderOutput:
        return OrderOutput(
            id=order.id,
            user_id=order.user_id,
            products=[
                OrderLineOutput(
                    product_id=item.product_id,
                    product=self._product_output(item.product) if item.product else None,
                    quantity=item.quantity,
                    price=cents_to_amount(item.unit_price_cents),
                )
                for item in order.items
            ],
            subtotal=cents_to_amount(order.subtotal_cents),
            total=cents_to_amount(order.total_cents),
            status=order.status,
            create_date=order.created_at,
            update_date=order.updated_at,
        )

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _get_order(self, order_id: str) -> Order:
        order = self._repo.find_by_id(order_id, options=self._load_options())
        if order is None:
            raise NotFoundError("Order", order_id)
        return order

    def _price_lines(
        self, lines: Sequence[OrderLineRequest]
    ) -> tuple[list[OrderItem], int, int]:
        """Validate requested lines and build snapshot-priced items."""
        if not lines:
            raise ValidationError("Order must contain at least one product", field="products")

        # Batch fetch active products referenced by the lines
        product_ids = {line.product_id for line in lines}
        products = {
            p.id: p for p in self._products.find_all(Product.id.in_(product_ids))
        }

        items: list[OrderItem] = []
        for position, line in enumerate(lines):
            product = products.get(line.product_id)
            if product is None:
                raise NotFoundError("Product", line.product_id)
            if line.quantity < 1:
                raise ValidationError(
                    "Quantity must be greater than 0",
                    field="quantity",
                    product_id=line.product_id,
                )
            if line.quantity > Limits.MAX_LINE_QUANTITY:
                raise ValidationError(
                    f"Quantity cannot exceed {Limits.MAX_LINE_QUANTITY}",
                    field="quantity",
                    product_id=line.product_id,
                )
            items.append(
                OrderItem(
                    position=position,
                    product_id=product.id,
                    quantity=line.quantity,
                    unit_price_cents=product.price_cents,
                )
            )

        subtotal_cents, total_cents = compute_totals(
            [(item.unit_price_cents, item.quantity) for item in items]
        )
        return items, subtotal_cents, total_cents

    @staticmethod
    def _validate_status(status: str) -> None:
        if status not in OrderStatus.ALL:
            raise InvalidStatusError("order", status, OrderStatus.ALL)

    def _commit(self, operation: str) -> None:
        try:
            safe_commit(self._db)
        except SQLAlchemyError as e:
            logger.error(f"Failed to {operation}", error=str(e))
            raise DatabaseError(operation)
