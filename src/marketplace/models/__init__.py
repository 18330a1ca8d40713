"""
Service Models Package

This package contains all Pydantic models used throughout the service,
including input validation models, output response models, and domain models.
"""

from .account import Account, AccountProfile, AccountRole
from .catalog_item import CatalogItem
from .input import (
    AddItemRequest,
    CreateOrderRequest,
    CreateReviewRequest,
    CreateStorefrontRequest,
    LoginRequest,
    RegisterRequest,
)
from .order import EnrichedOrder, EnrichedOrderLine, Order, OrderLine, OrderStatus
from .output import (
    AddItemOutput,
    AuthOutput,
    CreateOrderOutput,
    CreateReviewOutput,
    CreateStorefrontOutput,
    ItemListOutput,
    OrderListOutput,
    ProfileOutput,
    ReviewListOutput,
    StorefrontListOutput,
    StorefrontOutput,
)
from .review import Review
from .storefront import Storefront

__all__ = [
    # Domain models
    "Account",
    "AccountProfile",
    "AccountRole",
    "CatalogItem",
    "EnrichedOrder",
    "EnrichedOrderLine",
    "Order",
    "OrderLine",
    "OrderStatus",
    "Review",
    "Storefront",

    # Input models
    "AddItemRequest",
    "CreateOrderRequest",
    "CreateReviewRequest",
    "CreateStorefrontRequest",
    "LoginRequest",
    "RegisterRequest",

    # Output models
    "AddItemOutput",
    "AuthOutput",
    "CreateOrderOutput",
    "CreateReviewOutput",
    "CreateStorefrontOutput",
    "ItemListOutput",
    "OrderListOutput",
    "ProfileOutput",
    "ReviewListOutput",
    "StorefrontListOutput",
    "StorefrontOutput",
]
