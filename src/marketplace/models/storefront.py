"""
Storefront domain model.
"""

from typing import Annotated, List, Optional
from uuid import uuid4

from pydantic import Field

from marketplace.models.base import CamelModel, utc_now_iso

DEFAULT_STOREFRONT_IMAGE = (
    'https://images.unsplash.com/photo-1441986300917-64674bd600d8?auto=format&fit=crop&w=1400&q=80'
)


class Storefront(CamelModel):
    """A seller's storefront."""

    store_id: Annotated[str, Field(description='Unique identifier for the storefront')]
    name: Annotated[str, Field(min_length=1, description='Storefront name')]
    description: Annotated[str, Field(description='Storefront description')]
    category: Annotated[str, Field(description='Storefront category')]
    image: Annotated[str, Field(description='Image URL')]
    owner: Annotated[str, Field(description='Account id of the owner')]
    owner_name: Annotated[str, Field(description='Owner display name captured at creation')]
    items: Annotated[List[str], Field(
        default_factory=list,
        description='Item references'
    )]
    created_at: Annotated[str, Field(description='ISO timestamp when the storefront was created')]
    updated_at: Annotated[str, Field(description='ISO timestamp when the storefront was last updated')]

    @classmethod
    def create(
        cls,
        name: str,
        description: str,
        category: str,
        owner: str,
        owner_name: str,
        image: Optional[str] = None,
    ) -> 'Storefront':
        """Create a new storefront with generated ID and timestamps."""
        now = utc_now_iso()
        return cls(
            store_id=str(uuid4()),
            name=name,
            description=description,
            category=category,
            image=image or DEFAULT_STOREFRONT_IMAGE,
            owner=owner,
            owner_name=owner_name,
            items=[],
            created_at=now,
            updated_at=now,
        )
