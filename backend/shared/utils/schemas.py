"""
Shared Pydantic schemas used across the application.

Request and response bodies use camelCase keys (productId, accessToken,
roleType, ...). Fields are declared in snake_case and aliased; both forms
are accepted on input.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from shared.config.constants import Limits


class ApiModel(BaseModel):
    """Base schema with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(ApiModel):
    message: str


# =============================================================================
# Authentication Schemas
# =============================================================================


class RoleInfo(ApiModel):
    """Role embedded in a user record."""

    role_type: str = Field(min_length=1, max_length=50)
    description: str = ""


class RoleUpdate(ApiModel):
    role_type: str = Field(min_length=1, max_length=50)
    description: str | None = None


class LoginRequest(ApiModel):
    """Login request body."""

    email: EmailStr
    password: str = Field(min_length=1, max_length=Limits.MAX_PASSWORD_LENGTH)


class LoginUser(ApiModel):
    id: str
    username: str
    email: str
    role: RoleInfo


class LoginResponse(ApiModel):
    """Login response with the bearer token."""

    access_token: str
    user: LoginUser


class TokenTimeRequest(ApiModel):
    user_id: str = Field(min_length=1)


class TokenTimeResponse(ApiModel):
    """Remaining session lifetime in seconds and wall-clock expiry (HH:MM:SS)."""

    time_to_life: int
    exp_time: str


# =============================================================================
# User Schemas
# =============================================================================


class RegisterRequest(ApiModel):
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    email: EmailStr
    phone: str = Field(min_length=1, max_length=30)
    password: str = Field(
        min_length=Limits.MIN_PASSWORD_LENGTH,
        max_length=Limits.MAX_PASSWORD_LENGTH,
    )
    role: RoleInfo


class UserUpdate(ApiModel):
    name: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    phone: str | None = Field(default=None, min_length=1, max_length=30)
    password: str | None = Field(
        default=None,
        min_length=Limits.MIN_PASSWORD_LENGTH,
        max_length=Limits.MAX_PASSWORD_LENGTH,
    )
    role: RoleUpdate | None = None


class UserOutput(ApiModel):
    """User record as returned by the API. Never carries the password hash."""

    id: str
    name: str
    email: str
    role: RoleInfo
    phone: str
    created_date: datetime
    delete_date: datetime | None = None
    status: bool


class UserResponse(ApiModel):
    message: str
    user: UserOutput


class UserLookupResponse(ApiModel):
    user: UserOutput


class UserListResponse(ApiModel):
    user_list: list[UserOutput]


# =============================================================================
# Product Schemas
# =============================================================================


class ProductCreate(ApiModel):
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: str = Field(min_length=1, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    quantity: int
    price: float = Field(allow_inf_nan=False)


class ProductUpdate(ApiModel):
    name: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: str | None = Field(
        default=None, min_length=1, max_length=Limits.MAX_DESCRIPTION_LENGTH
    )
    quantity: int | None = None
    price: float | None = Field(default=None, allow_inf_nan=False)
    # Explicit override of the active flag
    status: bool | None = None


class ProductOutput(ApiModel):
    id: str
    name: str
    description: str
    quantity: int
    price: float
    status: bool


class ProductResponse(ApiModel):
    message: str
    product: ProductOutput


class ProductListResponse(ApiModel):
    message: str
    products: list[ProductOutput]


# =============================================================================
# Order Schemas
# =============================================================================


class OrderLineRequest(ApiModel):
    product_id: str = Field(min_length=1)
    quantity: int


class OrderCreate(ApiModel):
    user_id: str = Field(min_length=1)
    products: list[OrderLineRequest] = Field(max_length=Limits.MAX_ORDER_LINES)
    status: str | None = None


class OrderUpdate(ApiModel):
    user_id: str | None = Field(default=None, min_length=1)
    products: list[OrderLineRequest] | None = Field(
        default=None, max_length=Limits.MAX_ORDER_LINES
    )
    status: str | None = None


class OrderLineOutput(ApiModel):
    product_id: str
    # Current product row, None once it no longer exists
    product: ProductOutput | None = None
    quantity: int
    # Unit price captured when the line was written
    price: float


class OrderOutput(ApiModel):
    id: str
    user_id: str
    products: list[OrderLineOutput]
    subtotal: float
    total: float
    status: str
    create_date: datetime
    update_date: datetime


class OrderResponse(ApiModel):
    message: str
    order: OrderOutput


class OrderListResponse(ApiModel):
    message: str
    orders: list[OrderOutput]


# =============================================================================
# Menu Schemas
# =============================================================================


class MenuItemCreate(ApiModel):
    title: str = Field(min_length=1, max_length=100)
    path: str = Field(min_length=1, max_length=200)
    icon: str = Field(min_length=1, max_length=100)
    roles: list[str]


class MenuItemUpdate(ApiModel):
    title: str | None = Field(default=None, min_length=1, max_length=100)
    path: str | None = Field(default=None, min_length=1, max_length=200)
    icon: str | None = Field(default=None, min_length=1, max_length=100)
    roles: list[str] | None = None


class MenuItemOutput(ApiModel):
    id: str
    title: str
    path: str
    icon: str
    roles: list[str]
    is_active: bool


class MenuRoleRequest(ApiModel):
    role: str = Field(min_length=1)
