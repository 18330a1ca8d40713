"""
Input models for request validation using Pydantic.

This module defines the request bodies accepted by the marketplace handlers.
Missing, malformed and out of range fields surface as 400 responses.
"""

import re
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import Field, field_validator

from marketplace.models.account import AccountRole
from marketplace.models.base import CamelModel
from marketplace.models.order import OrderLine

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


def _require_text(value: str, field_name: str) -> str:
    if not value.strip():
        raise ValueError(f'{field_name} is required')
    return value


class RegisterRequest(CamelModel):
    """Request model for registering an account."""

    name: Annotated[str, Field(min_length=1, max_length=100, description='Display name', examples=['Jane Smith'])]
    email: Annotated[str, Field(description='Email address', examples=['jane@example.com'])]
    password: Annotated[str, Field(min_length=6, description='Password, at least 6 characters')]
    role: Annotated[AccountRole, Field(description='Account role', examples=['buyer', 'seller'])]

    @field_validator('email')
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        """Validate email format and normalize case."""
        v = v.strip()
        if not EMAIL_PATTERN.match(v):
            raise ValueError('Invalid email format')
        return v.lower()

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _require_text(v, 'name').strip()


class LoginRequest(CamelModel):
    """Request model for logging in."""

    email: Annotated[str, Field(min_length=1, description='Email address')]
    password: Annotated[str, Field(min_length=1, description='Password')]

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class CreateStorefrontRequest(CamelModel):
    """Request model for creating a storefront."""

    name: Annotated[str, Field(min_length=1, max_length=100, description='Storefront name')]
    description: Annotated[str, Field(min_length=1, max_length=2000, description='Storefront description')]
    category: Annotated[str, Field(min_length=1, max_length=100, description='Storefront category')]
    image: Annotated[Optional[str], Field(default=None, description='Image URL')] = None

    @field_validator('name', 'description', 'category')
    @classmethod
    def validate_text(cls, v: str, info) -> str:
        return _require_text(v, info.field_name)


class AddItemRequest(CamelModel):
    """Request model for adding an item to a storefront."""

    store_id: Annotated[str, Field(min_length=1, description='Owning storefront id')]
    name: Annotated[str, Field(min_length=1, max_length=200, description='Item name')]
    description: Annotated[str, Field(min_length=1, max_length=2000, description='Item description')]
    price: Annotated[float, Field(allow_inf_nan=False, description='Item price', examples=[19.99])]
    category: Annotated[str, Field(min_length=1, max_length=100, description='Item category')]
    image: Annotated[Optional[str], Field(default=None, description='Image URL')] = None

    @field_validator('price')
    @classmethod
    def validate_price(cls, v: float) -> float:
        """Validate that price is not negative."""
        if v < 0:
            raise ValueError('Price must be a valid positive number')
        return v

    @field_validator('store_id', 'name', 'description', 'category')
    @classmethod
    def validate_text(cls, v: str, info) -> str:
        return _require_text(v, info.field_name)


class CreateReviewRequest(CamelModel):
    """Request model for reviewing an item."""

    item_id: Annotated[str, Field(min_length=1, description='Reviewed item id')]
    rating: Annotated[int, Field(description='Rating from 1 to 5', examples=[4])]
    comment: Annotated[str, Field(description='Review text')]

    @field_validator('rating')
    @classmethod
    def validate_rating(cls, v: int) -> int:
        """Validate that rating is between 1 and 5."""
        if v < 1 or v > 5:
            raise ValueError('rating must be between 1 and 5')
        return v

    @field_validator('comment')
    @classmethod
    def validate_comment(cls, v: str) -> str:
        """Trim the comment and reject empty text."""
        v = v.strip()
        if not v:
            raise ValueError('comment is required')
        return v


class CreateOrderRequest(CamelModel):
    """Request model for placing an order."""

    items: Annotated[List[OrderLine], Field(min_length=1, description='Order lines')]
    shipping_address: Annotated[Union[str, Dict[str, Any]], Field(description='Shipping address')]
    total: Annotated[float, Field(allow_inf_nan=False, description='Order total', examples=[39.98])]

    @field_validator('total')
    @classmethod
    def validate_total(cls, v: float) -> float:
        """Validate that total is positive."""
        if v <= 0:
            raise ValueError('Total must be a positive number')
        return v

    @field_validator('shipping_address')
    @classmethod
    def validate_shipping_address(cls, v: Union[str, Dict[str, Any]]) -> Union[str, Dict[str, Any]]:
        """Reject empty addresses."""
        if isinstance(v, str):
            v = v.strip()
        if not v:
            raise ValueError('Shipping address is required')
        return v
