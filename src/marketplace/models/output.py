"""
Output models for API responses using Pydantic.

This module defines the response bodies returned by the marketplace handlers.
"""

from typing import Annotated, List

from pydantic import Field

from marketplace.models.account import AccountProfile
from marketplace.models.base import CamelModel
from marketplace.models.catalog_item import CatalogItem
from marketplace.models.order import EnrichedOrder, Order
from marketplace.models.review import Review
from marketplace.models.storefront import Storefront


class AuthOutput(CamelModel):
    """Response model for registration and login."""

    message: Annotated[str, Field(examples=['Login successful'])]
    user: AccountProfile
    token: Annotated[str, Field(description='Bearer token valid for 7 days')]


class ProfileOutput(CamelModel):
    """Response model for the caller's profile."""

    user: AccountProfile


class StorefrontOutput(CamelModel):
    """Response model for a single storefront."""

    storefront: Storefront


class CreateStorefrontOutput(StorefrontOutput):
    """Response model for storefront creation."""

    message: Annotated[str, Field(examples=['Storefront created successfully'])]


class StorefrontListOutput(CamelModel):
    """Response model for storefront listings."""

    storefronts: List[Storefront]


class AddItemOutput(CamelModel):
    """Response model for item creation."""

    message: Annotated[str, Field(examples=['Item added successfully'])]
    item: CatalogItem


class ItemListOutput(CamelModel):
    """Response model for the items of a storefront."""

    items: List[CatalogItem]


class ReviewListOutput(CamelModel):
    """Response model for the reviews of an item, newest first."""

    reviews: List[Review]
    average_rating: Annotated[float, Field(description='Mean rating rounded to one decimal, 0 without reviews')]
    total_reviews: Annotated[int, Field(ge=0)]


class CreateReviewOutput(CamelModel):
    """Response model for review creation."""

    message: Annotated[str, Field(examples=['Review created successfully'])]
    review: Review


class OrderListOutput(CamelModel):
    """Response model for the caller's orders."""

    orders: List[EnrichedOrder]


class CreateOrderOutput(CamelModel):
    """Response model for order creation."""

    message: Annotated[str, Field(examples=['Order created successfully'])]
    order: Order
