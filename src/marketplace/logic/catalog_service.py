"""
Business Logic Layer for catalog items.
"""

from aws_lambda_powertools.metrics import MetricUnit

from marketplace.dal.dynamodb_handler import DynamoDBHandler
from marketplace.dal.lookup import ITEMS_BY_STOREFRONT, find_by
from marketplace.handlers.utils.errors import ErrorContext
from marketplace.handlers.utils.observability import logger, metrics, tracer
from marketplace.logic.aggregation import parse_records
from marketplace.models.catalog_item import CatalogItem
from marketplace.models.input import AddItemRequest
from marketplace.models.output import AddItemOutput, ItemListOutput


class CatalogService:
    """Business logic service for catalog items."""

    def __init__(self, items_table_handler: DynamoDBHandler):
        self.items_dal = items_table_handler

    @tracer.capture_method
    def add_item(self, request: AddItemRequest, context: ErrorContext) -> AddItemOutput:
        """Add an item to the storefront named in the request."""
        item = CatalogItem.create(
            store_id=request.store_id,
            name=request.name,
            description=request.description,
            price=request.price,
            category=request.category,
            image=request.image,
        )
        self.items_dal.put_item(item=item.to_record(), context=context)

        metrics.add_metric(name="ItemAdded", unit=MetricUnit.Count, value=1)
        logger.info("Item added", extra={"item_id": item.id, "store_id": item.store_id})

        return AddItemOutput(message="Item added successfully", item=item)

    @tracer.capture_method
    def list_items(self, store_id: str, context: ErrorContext) -> ItemListOutput:
        """Items of one storefront."""
        result = find_by(self.items_dal, ITEMS_BY_STOREFRONT, store_id, context=context)
        logger.info("Items listed", extra={"store_id": store_id, "items_count": len(result.items), "path": result.path.value})
        return ItemListOutput(items=parse_records(result.items, CatalogItem))

