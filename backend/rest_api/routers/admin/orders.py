"""
Order workflow endpoints.

Thin router that delegates to OrderService, which prices lines from the
current catalog and stores the snapshot.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rest_api.services.domain import OrderService
from shared.config.constants import Limits
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context as current_user
from shared.utils.schemas import (
    OrderCreate,
    OrderListResponse,
    OrderResponse,
    OrderUpdate,
)


router = APIRouter(prefix="/api/orders", tags=["orders"])


def _get_service(db: Session) -> OrderService:
    """Get OrderService instance."""
    return OrderService(db)


@router.post("/create", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    body: OrderCreate,
    db: Session = Depends(get_db),
    _: dict = Depends(current_user),
) -> OrderResponse:
    """
    Create an order.

    Every line must reference an active product and have quantity >= 1.
    Unit prices are copied from the catalog; total includes 16% tax.
    """
    order = _get_service(db).create(body.user_id, body.products, body.status)
    return OrderResponse(message="Order created successfully", order=order)


@router.get("/getall", response_model=OrderListResponse)
def list_orders(
    order_status: str | None = Query(default=None, alias="status"),
    user_id: str | None = Query(default=None, alias="userId"),
    limit: int = Query(default=Limits.DEFAULT_PAGE_SIZE, ge=1, le=Limits.MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
    _: dict = Depends(current_user),
) -> OrderListResponse:
    """
    List orders, optionally filtered by status or owner.

    Supports pagination via limit/offset parameters (default: 100, max: 500).
    """
    orders = _get_service(db).list_orders(
        status=order_status, user_id=user_id, limit=limit, offset=offset
    )
    return OrderListResponse(message="Orders retrieved successfully", orders=orders)


@router.get("/get/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: str,
    db: Session = Depends(get_db),
    _: dict = Depends(current_user),
) -> OrderResponse:
    order = _get_service(db).get(order_id)
    return OrderResponse(message="Order retrieved successfully", order=order)


@router.patch("/update/{order_id}", response_model=OrderResponse)
def update_order(
    order_id: str,
    body: OrderUpdate,
    db: Session = Depends(get_db),
    _: dict = Depends(current_user),
) -> OrderResponse:
    """Update owner, lines or status. New lines replace the old ones."""
    order = _get_service(db).update(
        order_id,
        user_id=body.user_id,
        lines=body.products,
        status=body.status,
    )
    return OrderResponse(message="Order updated successfully", order=order)


@router.delete("/delete/{order_id}", response_model=OrderResponse)
def cancel_order(
    order_id: str,
    db: Session = Depends(get_db),
    _: dict = Depends(current_user),
) -> OrderResponse:
    """Cancel an order. The row is kept with status cancelled."""
    order = _get_service(db).cancel(order_id)
    return OrderResponse(message="Order cancelled successfully", order=order)
