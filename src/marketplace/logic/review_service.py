"""
Business Logic Layer for reviews.

Reviews are listed newest first together with their average rating, which is
recomputed from the listed reviews on every read. An account can review an
item once; the guard is a read before the write, so two concurrent submissions
can both pass it.
"""

from aws_lambda_powertools.metrics import MetricUnit

from marketplace.dal.dynamodb_handler import DynamoDBHandler
from marketplace.dal.lookup import REVIEWS_BY_ITEM, find_by
from marketplace.handlers.utils.errors import ConflictError, ErrorContext, ResourceNotFoundError
from marketplace.handlers.utils.observability import logger, metrics, tracer
from marketplace.logic.aggregation import average_rating, newest_first, parse_records
from marketplace.models.input import CreateReviewRequest
from marketplace.models.output import CreateReviewOutput, ReviewListOutput
from marketplace.models.review import Review
from marketplace.security.auth import UserClaims


class ReviewService:
    """Business logic service for reviews."""

    def __init__(self, reviews_table_handler: DynamoDBHandler, items_table_handler: DynamoDBHandler):
        self.reviews_dal = reviews_table_handler
        self.items_dal = items_table_handler

    def _require_item(self, item_id: str, context: ErrorContext) -> None:
        if not self.items_dal.get_item(key={'id': item_id}, context=context):
            raise ResourceNotFoundError(resource_type="Item", resource_id=item_id, context=context)

    @tracer.capture_method
    def list_reviews(self, item_id: str, context: ErrorContext) -> ReviewListOutput:
        """
        Reviews of one item, newest first, with their average rating.

        Raises:
            ResourceNotFoundError: If the item does not exist
            DALError: If database operation fails
        """
        self._require_item(item_id, context)

        result = find_by(self.reviews_dal, REVIEWS_BY_ITEM, item_id, context=context)
        reviews = parse_records(newest_first(result.items), Review)

        return ReviewListOutput(
            reviews=reviews,
            average_rating=average_rating(review.to_record() for review in reviews),
            total_reviews=len(reviews),
        )

    @tracer.capture_method
    def create_review(self, claims: UserClaims, request: CreateReviewRequest, context: ErrorContext) -> CreateReviewOutput:
        """
        Store the caller's review of an item.

        Raises:
            ResourceNotFoundError: If the item does not exist
            ConflictError: If the caller already reviewed the item
            DALError: If database operation fails
        """
        self._require_item(request.item_id, context)

        existing = find_by(
            self.reviews_dal,
            REVIEWS_BY_ITEM,
            request.item_id,
            extra_filter=('userId', claims.user_id),
            context=context,
        )
        if existing.items:
            metrics.add_metric(name="DuplicateReview", unit=MetricUnit.Count, value=1)
            raise ConflictError("You have already reviewed this item", context=context)

        review = Review.create(
            item_id=request.item_id,
            user_id=claims.user_id,
            rating=request.rating,
            comment=request.comment,
        )
        self.reviews_dal.put_item(item=review.to_record(), context=context)

        metrics.add_metric(name="ReviewCreated", unit=MetricUnit.Count, value=1)
        logger.info("Review created", extra={"review_id": review.review_id, "item_id": review.item_id})

        return CreateReviewOutput(message="Review created successfully", review=review)
