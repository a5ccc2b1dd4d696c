"""
Product catalog endpoints.

Thin router that delegates to ProductService.
All business logic is in rest_api/services/domain/product_service.py.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from rest_api.services.domain import ProductService
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context as current_user, require_admin
from shared.utils.schemas import (
    ProductCreate,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
)


router = APIRouter(prefix="/api/products", tags=["products"])


def _get_service(db: Session) -> ProductService:
    """Get ProductService instance."""
    return ProductService(db)


@router.post("/create", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductCreate,
    db: Session = Depends(get_db),
    _: dict = Depends(require_admin),
) -> ProductResponse:
    """Create a product. Quantity and price must be zero or positive."""
    product = _get_service(db).create(body.model_dump())
    return ProductResponse(message="Product created successfully", product=product)


@router.get("/getall", response_model=ProductListResponse)
def list_products(
    db: Session = Depends(get_db),
    _: dict = Depends(current_user),
) -> ProductListResponse:
    """List active products."""
    products = _get_service(db).list_active()
    return ProductListResponse(message="Products retrieved successfully", products=products)


@router.get("/get/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: str,
    db: Session = Depends(get_db),
    _: dict = Depends(current_user),
) -> ProductResponse:
    product = _get_service(db).get_by_id(product_id)
    return ProductResponse(message="Product retrieved successfully", product=product)


@router.patch("/update/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    body: ProductUpdate,
    db: Session = Depends(get_db),
    _: dict = Depends(require_admin),
) -> ProductResponse:
    """
    Partially update an active product.

    An explicit status of false deactivates it.
    """
    product = _get_service(db).update(
        product_id, body.model_dump(exclude_unset=True, exclude_none=True)
    )
    return ProductResponse(message="Product updated successfully", product=product)


@router.delete("/delete/{product_id}", response_model=ProductResponse)
def delete_product(
    product_id: str,
    db: Session = Depends(get_db),
    _: dict = Depends(require_admin),
) -> ProductResponse:
    """Logically delete a product."""
    product = _get_service(db).delete(product_id)
    return ProductResponse(message="Product deleted successfully", product=product)
