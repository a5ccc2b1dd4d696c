"""
Order Models: Order, OrderItem.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import OrderStatus

from .base import AuditMixin, Base, new_id
from .catalog import Product


class Order(AuditMixin, Base):
    """
    A priced order placed on behalf of a user.

    subtotal_cents and total_cents are computed when the items are written;
    total_cents = subtotal_cents * 1.16 rounded half-up.
    Inherits: is_active, created_at, updated_at, deleted_at from AuditMixin.
    """

    __tablename__ = "shop_order"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    subtotal_cents: Mapped[int] = mapped_column(BigInteger, nullable=False)
    total_cents: Mapped[int] = mapped_column(BigInteger, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=OrderStatus.PENDING, index=True
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'paid', 'cancelled')",
            name="chk_order_status_valid",
        ),
        CheckConstraint("subtotal_cents >= 0", name="chk_order_subtotal_non_negative"),
        CheckConstraint("total_cents >= 0", name="chk_order_total_non_negative"),
    )

    # Items are owned by the order and replaced as a set
    items: Mapped[list["OrderItem"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position",
    )

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, status='{self.status}', total_cents={self.total_cents})>"


class OrderItem(Base):
    """
    A single line of an order.
    Stores the product price at the time the line was written.
    """

    __tablename__ = "order_item"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    order_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("shop_order.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    product_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("product.id"), nullable=False, index=True
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price_cents: Mapped[int] = mapped_column(BigInteger, nullable=False)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="chk_order_item_qty_positive"),
        CheckConstraint("unit_price_cents >= 0", name="chk_order_item_price_non_negative"),
    )

    # Relationships
    order: Mapped["Order"] = relationship(back_populates="items")
    product: Mapped[Optional["Product"]] = relationship()
