"""
Navigation menu endpoints.
Thin router that delegates to MenuService.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from rest_api.services.domain import MenuService
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context as current_user, require_admin
from shared.utils.schemas import (
    MenuItemCreate,
    MenuItemOutput,
    MenuItemUpdate,
    MenuRoleRequest,
)


router = APIRouter(prefix="/api/menu", tags=["menu"])


def _get_service(db: Session) -> MenuService:
    """Get MenuService instance."""
    return MenuService(db)


@router.get("/getall", response_model=list[MenuItemOutput])
def list_menu(
    db: Session = Depends(get_db),
    _: dict = Depends(current_user),
) -> list[MenuItemOutput]:
    return _get_service(db).list_active()


@router.post("/byrole", response_model=list[MenuItemOutput])
def list_menu_by_role(
    body: MenuRoleRequest,
    db: Session = Depends(get_db),
    _: dict = Depends(current_user),
) -> list[MenuItemOutput]:
    """Active items visible to the given role type."""
    return _get_service(db).list_by_role(body.role)


@router.post("/create", response_model=MenuItemOutput, status_code=status.HTTP_201_CREATED)
def create_menu_item(
    body: MenuItemCreate,
    db: Session = Depends(get_db),
    _: dict = Depends(require_admin),
) -> MenuItemOutput:
    """Create a menu item. The path must not be used by another item."""
    return _get_service(db).create(body.model_dump())


@router.get("/get/{item_id}", response_model=MenuItemOutput)
def get_menu_item(
    item_id: str,
    db: Session = Depends(get_db),
    _: dict = Depends(current_user),
) -> MenuItemOutput:
    return _get_service(db).get_by_id(item_id)


@router.patch("/update/{item_id}", response_model=MenuItemOutput)
def update_menu_item(
    item_id: str,
    body: MenuItemUpdate,
    db: Session = Depends(get_db),
    _: dict = Depends(require_admin),
) -> MenuItemOutput:
    return _get_service(db).update(
        item_id, body.model_dump(exclude_unset=True, exclude_none=True)
    )


@router.patch("/delete/{item_id}", response_model=MenuItemOutput)
def delete_menu_item(
    item_id: str,
    db: Session = Depends(get_db),
    _: dict = Depends(require_admin),
) -> MenuItemOutput:
    """Logically delete a menu item."""
    return _get_service(db).delete(item_id)
