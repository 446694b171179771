"""
Request schemas for the store API.

Every endpoint that takes input validates it here, at the boundary, before
any workflow runs. Bodies use the front end's camelCase keys; the validated
objects are handed to the workflows as typed commands.
"""
from decimal import Decimal
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator
from pydantic.alias_generators import to_camel

from .cart import MAX_LINE_QUANTITY
from .models import OrderStatus


class Command(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)


# ------------------------------
# ACCOUNTS
# ------------------------------
class RegisterUser(Command):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class LoginUser(Command):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


# ------------------------------
# CATALOG
# ------------------------------
class PageQuery(Command):
    limit: Optional[int] = Field(None, ge=1, le=500)
    offset: int = Field(0, ge=0)


class SearchQuery(Command):
    q: str = Field(..., min_length=1, description="Search term")


class CategoryCreate(Command):
    name: str = Field(..., min_length=1)
    name_en: str = Field(..., min_length=1)
    image: str
    icon: str


class ProductCreate(Command):
    name: str = Field(..., min_length=1)
    name_en: str = Field(..., min_length=1)
    description: str
    description_en: str
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    discounted_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    category_id: int
    image: str
    rating: float = Field(0, ge=0, le=5)
    review_count: int = Field(0, ge=0)
    stock: int = Field(0, ge=0)
    brand: str = "SportZone"
    badge: Optional[str] = None
    badge_en: Optional[str] = None
    featured: bool = False


class ProductUpdate(Command):
    """Partial update; only the fields present in the body are changed."""

    # Columns that may be cleared with an explicit null
    CLEARABLE: ClassVar[tuple] = ('discounted_price', 'badge', 'badge_en')

    name: Optional[str] = Field(None, min_length=1)
    name_en: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    description_en: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    discounted_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    category_id: Optional[int] = None
    image: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    review_count: Optional[int] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    brand: Optional[str] = None
    badge: Optional[str] = None
    badge_en: Optional[str] = None
    featured: Optional[bool] = None

    @model_validator(mode='after')
    def reject_null_for_required_columns(self):
        for field in sorted(self.model_fields_set):
            if getattr(self, field) is None and field not in self.CLEARABLE:
                raise ValueError(f"{to_camel(field)} cannot be null")
        return self


class ReviewCreate(Command):
    product_id: int
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None


# ------------------------------
# CART & CHECKOUT
# ------------------------------
class CartAdd(Command):
    product_id: int
    quantity: int = Field(1, ge=1, le=MAX_LINE_QUANTITY)


class CartUpdate(Command):
    quantity: int = Field(..., ge=1, le=MAX_LINE_QUANTITY)


class PaymentIntentRequest(Command):
    amount: Decimal = Field(..., gt=0)


class ShippingDetails(Command):
    address: str = Field(..., min_length=5)
    city: str = Field(..., min_length=2)
    phone: str = Field(..., min_length=5)


class StatusUpdate(Command):
    status: OrderStatus
