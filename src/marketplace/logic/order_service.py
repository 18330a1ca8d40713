"""
Business Logic Layer for Order Management.

Orders are written once, as ``pending``. Listing returns the caller's orders
with every line enriched from the catalog.
"""

from typing import Any, Dict, Optional

from aws_lambda_powertools.metrics import MetricUnit

from marketplace.dal.dynamodb_handler import DynamoDBHandler
from marketplace.dal.lookup import ORDERS_BY_ACCOUNT, find_by
from marketplace.handlers.utils.errors import ErrorContext
from marketplace.handlers.utils.observability import logger, metrics, tracer
from marketplace.logic.aggregation import enrich_order_lines, parse_records
from marketplace.models.catalog_item import CatalogItem
from marketplace.models.input import CreateOrderRequest
from marketplace.models.order import EnrichedOrder, Order
from marketplace.models.output import CreateOrderOutput, OrderListOutput
from marketplace.security.auth import UserClaims


class OrderService:
    """Business logic service for order management."""

    def __init__(
        self,
        orders_table_handler: DynamoDBHandler,
        items_table_handler: DynamoDBHandler,
        enrichment_workers: int = 8,
    ):
        """
        Initialize order service.

        Args:
            orders_table_handler: DynamoDB handler for orders table
            items_table_handler: DynamoDB handler for the catalog, used for enrichment
            enrichment_workers: Concurrent item lookups when listing orders
        """
        self.orders_dal = orders_table_handler
        self.items_dal = items_table_handler
        self.enrichment_workers = enrichment_workers

    def _fetch_item_details(self, item_id: Optional[str]) -> Optional[Dict[str, Any]]:
        # runs on enrichment worker threads
        if not isinstance(item_id, str) or not item_id:
            return None
        record = self.items_dal.get_item_threadsafe(key={'id': item_id})
        if record is None:
            return None
        return CatalogItem.model_validate(record).to_record()

    @tracer.capture_method
    def create_order(self, claims: UserClaims, request: CreateOrderRequest, context: ErrorContext) -> CreateOrderOutput:
        """
        Create a new pending order for the caller.

        Raises:
            DALError: If database operation fails
        """
        order = Order.create(
            user_id=claims.user_id,
            items=request.items,
            shipping_address=request.shipping_address,
            total=request.total,
        )
        self.orders_dal.put_item(item=order.to_record(), context=context)

        metrics.add_metric(name="OrderCreated", unit=MetricUnit.Count, value=1)
        metrics.add_metric(name="OrderLineCount", unit=MetricUnit.Count, value=len(order.items))
        logger.info("Order created successfully", extra={
            "order_id": order.order_id,
            "user_id": order.user_id,
            "total": order.total,
        })

        return CreateOrderOutput(message="Order created successfully", order=order)

    @tracer.capture_method
    def list_orders(self, claims: UserClaims, context: ErrorContext) -> OrderListOutput:
        """
        The caller's orders with enriched lines.

        A missing or unreadable item leaves that line's details empty; it never
        fails the listing.
        """
        result = find_by(self.orders_dal, ORDERS_BY_ACCOUNT, claims.user_id, context=context)
        enriched = enrich_order_lines(
            result.items,
            fetch_item=self._fetch_item_details,
            max_workers=self.enrichment_workers,
        )

        logger.info("Orders listed", extra={"user_id": claims.user_id, "orders_count": len(enriched)})
        return OrderListOutput(orders=parse_records(enriched, EnrichedOrder))
