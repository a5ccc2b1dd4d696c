"""
Back-office routers - combines the resource sub-routers.

- products: Product catalog CRUD (/api/products)
- orders: Order workflow (/api/orders)
- menu: Navigation menu registry (/api/menu)

Each sub-router carries its own prefix.
"""

from fastapi import APIRouter

from .products import router as products_router
from .orders import router as orders_router
from .menu import router as menu_router


router = APIRouter()

router.include_router(products_router)
router.include_router(orders_router)
router.include_router(menu_router)

__all__ = ["router"]
