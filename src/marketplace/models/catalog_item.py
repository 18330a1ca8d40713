"""
Catalog item domain model.
"""

from typing import Annotated, Any, List, Optional
from uuid import uuid4

from pydantic import Field

from marketplace.models.base import CamelModel, utc_now_iso

DEFAULT_ITEM_IMAGE = (
    'https://images.unsplash.com/photo-1441986300917-64674bd600d8?auto=format&fit=crop&w=800&q=80'
)


class CatalogItem(CamelModel):
    """An item listed in a storefront."""

    id: Annotated[str, Field(description='Unique identifier for the item')]
    store_id: Annotated[str, Field(description='Owning storefront id')]
    name: Annotated[str, Field(description='Item name')]
    description: Annotated[str, Field(description='Item description')]
    price: Annotated[float, Field(ge=0, description='Item price', examples=[19.99])]
    category: Annotated[str, Field(description='Item category')]
    image: Annotated[str, Field(description='Image URL')]
    average_rating: Annotated[float, Field(
        default=0,
        description='Average rating, recomputed from reviews on read'
    )] = 0
    reviews: Annotated[List[Any], Field(default_factory=list, description='Review references')]
    created_at: Annotated[str, Field(description='ISO timestamp when the item was created')]
    updated_at: Annotated[str, Field(description='ISO timestamp when the item was last updated')]

    @classmethod
    def create(
        cls,
        store_id: str,
        name: str,
        description: str,
        price: float,
        category: str,
        image: Optional[str] = None,
    ) -> 'CatalogItem':
        """Create a new catalog item with generated ID and timestamps."""
        now = utc_now_iso()
        return cls(
            id=str(uuid4()),
            store_id=store_id,
            name=name,
            description=description,
            price=price,
            category=category,
            image=image or DEFAULT_ITEM_IMAGE,
            average_rating=0,
            reviews=[],
            created_at=now,
            updated_at=now,
        )
