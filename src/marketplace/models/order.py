"""
Order domain model.

Orders are written once with status ``pending``. Line items keep the price at
purchase time; when orders are listed each line is enriched with the current
catalog record of its item.
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Optional, Union
from uuid import uuid4

from pydantic import Field

from marketplace.models.base import CamelModel, utc_now_iso
from marketplace.models.catalog_item import CatalogItem


class OrderStatus(str, Enum):
    """Order status enumeration."""

    PENDING = 'pending'


class OrderLine(CamelModel):
    """A single line of an order."""

    item_id: Annotated[str, Field(min_length=1, description='Ordered item id')]
    quantity: Annotated[int, Field(ge=1, description='Number of units', examples=[2])]
    price: Annotated[float, Field(
        ge=0,
        allow_inf_nan=False,
        description='Unit price at purchase time',
        examples=[19.99]
    )]


class EnrichedOrderLine(OrderLine):
    """Order line with the current catalog record of its item, if it could be read."""

    item_details: Annotated[Optional[CatalogItem], Field(
        default=None,
        description='Catalog record of the item, null when it could not be read'
    )] = None


class Order(CamelModel):
    """Core Order domain model."""

    order_id: Annotated[str, Field(description='Unique identifier for the order')]
    user_id: Annotated[str, Field(description='Account that placed the order')]
    items: Annotated[List[OrderLine], Field(min_length=1, description='Order lines')]
    shipping_address: Annotated[Union[str, Dict[str, Any]], Field(description='Shipping address')]
    total: Annotated[float, Field(gt=0, description='Order total', examples=[39.98])]
    status: Annotated[OrderStatus, Field(
        default=OrderStatus.PENDING,
        description='Current status of the order'
    )] = OrderStatus.PENDING
    created_at: Annotated[str, Field(description='ISO timestamp when the order was created')]
    updated_at: Annotated[str, Field(description='ISO timestamp when the order was last updated')]

    @classmethod
    def create(
        cls,
        user_id: str,
        items: List[OrderLine],
        shipping_address: Union[str, Dict[str, Any]],
        total: float,
    ) -> 'Order':
        """Create a new pending order with generated ID and timestamps."""
        now = utc_now_iso()
        return cls(
            order_id=str(uuid4()),
            user_id=user_id,
            items=items,
            shipping_address=shipping_address,
            total=total,
            status=OrderStatus.PENDING,
            created_at=now,
            updated_at=now,
        )


class EnrichedOrder(Order):
    """Order as listed to its owner, with enriched lines."""

    items: Annotated[List[EnrichedOrderLine], Field(description='Order lines with item details')]
