"""
Product Service.

Handles the product catalog: create, read, partial update and logical
delete. Prices arrive as decimal amounts and are stored in cents.

Usage:
    from rest_api.services.domain import ProductService

    service = ProductService(db)
    products = service.list_active()
    product = service.create({"name": "Widget", "description": "...", "quantity": 5, "price": 10})
"""

from __future__ import annotations

import math
from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import Product
from rest_api.models.base import utcnow
from rest_api.services.base_service import BaseCRUDService
from shared.config.constants import Limits
from shared.config.logging import get_logger
from shared.utils.exceptions import ValidationError
from shared.utils.money import cents_to_amount, from_cents, to_cents
from shared.utils.schemas import ProductOutput

logger = get_logger(__name__)


class ProductService(BaseCRUDService[Product, ProductOutput]):
    """
    Service for product management.

    Business rules:
    - quantity and price must be zero or positive and within Limits
    - only active products can be read, updated or deleted
    - an explicit boolean status overrides the active flag on update
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Product,
            output_schema=ProductOutput,
            entity_name="Product",
        )

    def list_active(self) -> list[ProductOutput]:
        return self.list_all(order_by=Product.created_at)

    def to_output(self, entity: Product) -> ProductOutput:
        return ProductOutput(
            id=entity.id,
            name=entity.name,
            description=entity.description,
            quantity=entity.quantity,
            price=cents_to_amount(entity.price_cents),
            status=entity.is_active,
        )

    # =========================================================================
    # Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> None:
        self._validate_amounts(data)

    def _validate_update(self, entity: Product, data: dict[str, Any]) -> None:
        self._validate_amounts(data)

    def _prepare_data(self, data: dict[str, Any]) -> dict[str, Any]:
        prepared = dict(data)
        if "price" in prepared:
            prepared["price_cents"] = to_cents(prepared.pop("price"))
        if "status" in prepared:
            is_active = prepared.pop("status")
            prepared["is_active"] = is_active
            if not is_active:
                prepared["deleted_at"] = utcnow()
        return prepared

    def _after_create(self, entity: Product) -> None:
        logger.info("Product created", product_id=entity.id, price_cents=entity.price_cents)

    @staticmethod
    def _validate_amounts(data: dict[str, Any]) -> None:
        quantity = data.get("quantity")
        if quantity is not None:
            if quantity < 0:
                raise ValidationError("Quantity must be zero or positive", field="quantity")
            if quantity > Limits.MAX_STOCK_QUANTITY:
                raise ValidationError(
                    f"Quantity cannot exceed {Limits.MAX_STOCK_QUANTITY}", field="quantity"
                )
        price = data.get("price")
        if price is not None:
            # NaN fails every comparison
            if not math.isfinite(price):
                raise ValidationError("Price must be a finite number", field="price")
            if price < 0:
                raise ValidationError("Price must be zero or positive", field="price")
            if price > Limits.MAX_PRICE_CENTS / 100:
                raise ValidationError(
                    f"Price cannot exceed {from_cents(Limits.MAX_PRICE_CENTS)}", field="price"
                )
