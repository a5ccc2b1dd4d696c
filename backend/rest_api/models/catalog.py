"""
Product Catalog Model.
"""

from __future__ import annotations

from sqlalchemy import BigInteger, CheckConstraint, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import AuditMixin, Base, new_id


class Product(AuditMixin, Base):
    """
    A sellable product with stock quantity and unit price.
    Price is stored in cents.
    Inherits: is_active, created_at, updated_at, deleted_at from AuditMixin.
    """

    __tablename__ = "product"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    price_cents: Mapped[int] = mapped_column(BigInteger, nullable=False)

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="chk_product_quantity_non_negative"),
        CheckConstraint("price_cents >= 0", name="chk_product_price_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', price_cents={self.price_cents})>"
