"""
Review domain model.
"""

from typing import Annotated
from uuid import uuid4

from pydantic import Field

from marketplace.models.base import CamelModel, utc_now_iso


class Review(CamelModel):
    """A rating and comment left by an account on a catalog item."""

    review_id: Annotated[str, Field(description='Unique identifier for the review')]
    item_id: Annotated[str, Field(description='Reviewed item id')]
    user_id: Annotated[str, Field(description='Authoring account id')]
    rating: Annotated[int, Field(ge=1, le=5, description='Rating from 1 to 5')]
    comment: Annotated[str, Field(min_length=1, description='Review text')]
    created_at: Annotated[str, Field(description='ISO timestamp when the review was created')]
    updated_at: Annotated[str, Field(description='ISO timestamp when the review was last updated')]

    @classmethod
    def create(cls, item_id: str, user_id: str, rating: int, comment: str) -> 'Review':
        """Create a new review with generated ID and timestamps."""
        now = utc_now_iso()
        return cls(
            review_id=str(uuid4()),
            item_id=item_id,
            user_id=user_id,
            rating=rating,
            comment=comment.strip(),
            created_at=now,
            updated_at=now,
        )
