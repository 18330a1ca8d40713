"""
Data Access Layer (DAL) for DynamoDB operations.

This module wraps a single DynamoDB table with consistent error handling,
observability and type conversion. Numbers are written as ``Decimal`` and read
back as ``int``/``float`` so no ``Decimal`` leaves this layer.
"""

import functools
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

import boto3
from aws_lambda_powertools.metrics import MetricUnit
from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from botocore.exceptions import BotoCoreError, ClientError

from marketplace.handlers.utils.errors import DownstreamError, ErrorContext, ErrorSeverity
from marketplace.handlers.utils.observability import logger, metrics, tracer


class DALError(DownstreamError):
    """Base exception for Data Access Layer errors."""

    def __init__(
        self,
        message: str,
        operation: str,
        table_name: str,
        error_code: str = "DAL_ERROR",
        severity: ErrorSeverity = ErrorSeverity.HIGH,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            severity=severity,
            context=context,
        )
        self.operation = operation
        self.table_name = table_name


def to_dynamodb(value: Any) -> Any:
    """Convert a Python value into something boto3 can serialize."""
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {key: to_dynamodb(inner) for key, inner in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_dynamodb(inner) for inner in value]
    return value


def from_dynamodb(value: Any) -> Any:
    """Convert a boto3 deserialized value back to plain Python types."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {key: from_dynamodb(inner) for key, inner in value.items()}
    if isinstance(value, (list, set, tuple)):
        return [from_dynamodb(inner) for inner in value]
    return value


_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def _index_missing(error_code: str, error_message: str) -> bool:
    # DynamoDB reports a missing GSI as ValidationException, some emulators as ResourceNotFoundException
    if error_code == 'ResourceNotFoundException':
        return True
    return error_code == 'ValidationException' and 'index' in error_message.lower()


class DynamoDBHandler:
    """DynamoDB table handler with error translation and observability."""

    def __init__(
        self,
        table_name: str,
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        dynamodb_resource: Optional[Any] = None,
    ):
        """
        Initialize DynamoDB handler.

        Args:
            table_name: Name of the DynamoDB table
            region_name: AWS region name
            endpoint_url: DynamoDB endpoint URL (for local testing)
            dynamodb_resource: Pre-built boto3 DynamoDB resource to share between tables
        """
        self.table_name = table_name

        if dynamodb_resource is None:
            session_config = {}
            if region_name:
                session_config['region_name'] = region_name
            if endpoint_url:
                session_config['endpoint_url'] = endpoint_url
            dynamodb_resource = boto3.resource('dynamodb', **session_config)

        self.dynamodb = dynamodb_resource
        self.table = self.dynamodb.Table(table_name)

        logger.debug("DynamoDB handler initialized", extra={
            "table_name": table_name,
            "region_name": region_name,
            "endpoint_url": endpoint_url,
        })

    def _handle_dynamodb_errors(
        self,
        operation: str,
        context: Optional[ErrorContext] = None,
        index_name: Optional[str] = None,
    ) -> Callable:
        """Decorator to translate DynamoDB errors into DALError consistently."""

        def decorator(func):
            @functools.wraps(func)
            def wrapper(*args, **kwargs):
                try:
                    metrics.add_metric(name=f"DynamoDB{operation}Count", unit=MetricUnit.Count, value=1)
                    return func(*args, **kwargs)

                except ClientError as e:
                    error_code = e.response['Error']['Code']
                    error_message = e.response['Error'].get('Message', '')

                    metrics.add_metric(name=f"DynamoDB{operation}Error", unit=MetricUnit.Count, value=1)
                    logger.warning(f"DynamoDB {operation} error", extra={
                        "error_code": error_code,
                        "error_message": error_message,
                        "table_name": self.table_name,
                        "operation": operation,
                    })

                    if index_name and _index_missing(error_code, error_message):
                        raise DALError(
                            message=f"Index {index_name} on table {self.table_name} is unavailable",
                            operation=operation,
                            table_name=self.table_name,
                            error_code="INDEX_UNAVAILABLE",
                            context=context,
                        ) from e
                    if error_code == 'ResourceNotFoundException':
                        raise DALError(
                            message=f"Table {self.table_name} not found",
                            operation=operation,
                            table_name=self.table_name,
                            error_code="TABLE_NOT_FOUND",
                            context=context,
                        ) from e
                    raise DALError(
                        message=f"DynamoDB error: {error_message}",
                        operation=operation,
                        table_name=self.table_name,
                        error_code=f"DYNAMODB_{error_code}",
                        context=context,
                    ) from e

                except BotoCoreError as e:
                    metrics.add_metric(name=f"DynamoDB{operation}Error", unit=MetricUnit.Count, value=1)
                    logger.warning(f"DynamoDB connection error during {operation}", extra={
                        "error": str(e),
                        "table_name": self.table_name,
                    })
                    raise DALError(
                        message=f"Database connection error: {str(e)}",
                        operation=operation,
                        table_name=self.table_name,
                        error_code="DATABASE_CONNECTION_ERROR",
                        context=context,
                    ) from e

            return wrapper
        return decorator

    @tracer.capture_method
    def get_item(
        self,
        key: Dict[str, Any],
        consistent_read: bool = False,
        context: Optional[ErrorContext] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Get a single item from DynamoDB.

        Args:
            key: Primary key of the item to retrieve
            consistent_read: Whether to use strongly consistent read
            context: Error context for tracing

        Returns:
            Item data or None if not found

        Raises:
            DALError: If DynamoDB operation fails
        """

        @self._handle_dynamodb_errors("GetItem", context)
        def _get_item():
            response = self.table.get_item(Key=key, ConsistentRead=consistent_read)
            item = response.get('Item')
            if item is None:
                logger.debug("Item not found", extra={"table_name": self.table_name, "key": key})
                return None
            return from_dynamodb(item)

        return _get_item()

    def get_item_threadsafe(
        self,
        key: Dict[str, Any],
        context: Optional[ErrorContext] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Get a single item through the table's low-level client.

        Safe to call from worker threads: only the client is touched, never the
        shared resource.
        """

        @self._handle_dynamodb_errors("GetItem", context)
        def _get_item():
            response = self.table.meta.client.get_item(
                TableName=self.table_name,
                Key={name: _serializer.serialize(to_dynamodb(value)) for name, value in key.items()},
            )
            item = response.get('Item')
            if item is None:
                return None
            return from_dynamodb({name: _deserializer.deserialize(value) for name, value in item.items()})

        return _get_item()

    @tracer.capture_method
    def put_item(
        self,
        item: Dict[str, Any],
        context: Optional[ErrorContext] = None,
    ) -> Dict[str, Any]:
        """
        Put an item into DynamoDB.

        Args:
            item: Item data to store
            context: Error context for tracing

        Returns:
            The stored item data

        Raises:
            DALError: If DynamoDB operation fails
        """

        @self._handle_dynamodb_errors("PutItem", context)
        def _put_item():
            self.table.put_item(Item=to_dynamodb(item))

            logger.info("Item stored successfully", extra={"table_name": self.table_name})
            return item

        return _put_item()

    @tracer.capture_method
    def update_item(
        self,
        key: Dict[str, Any],
        update_expression: str,
        expression_attribute_values: Dict[str, Any],
        condition_expression: Optional[Any] = None,
        context: Optional[ErrorContext] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Update attributes of an existing item.

        Args:
            key: Primary key of the item to update
            update_expression: Update expression
            expression_attribute_values: Expression attribute values
            condition_expression: Conditional expression for the update
            context: Error context for tracing

        Returns:
            Updated item data

        Raises:
            DALError: If DynamoDB operation fails
        """

        @self._handle_dynamodb_errors("UpdateItem", context)
        def _update_item():
            update_kwargs = {
                'Key': key,
                'UpdateExpression': update_expression,
                'ExpressionAttributeValues': to_dynamodb(expression_attribute_values),
                'ReturnValues': 'ALL_NEW',
            }
            if condition_expression is not None:
                update_kwargs['ConditionExpression'] = condition_expression

            response = self.table.update_item(**update_kwargs)

            logger.info("Item updated successfully", extra={"table_name": self.table_name, "key": key})
            return from_dynamodb(response.get('Attributes'))

        return _update_item()

    @tracer.capture_method
    def query_items(
        self,
        key_condition: Any,
        index_name: Optional[str] = None,
        filter_expression: Optional[Any] = None,
        context: Optional[ErrorContext] = None,
    ) -> List[Dict[str, Any]]:
        """
        Query items from DynamoDB, following pagination to the last page.

        Args:
            key_condition: Key condition expression
            index_name: Global secondary index name
            filter_expression: Filter expression
            context: Error context for tracing

        Returns:
            All matching items

        Raises:
            DALError: If DynamoDB operation fails
        """

        @self._handle_dynamodb_errors("Query", context, index_name=index_name)
        def _query_items():
            query_kwargs: Dict[str, Any] = {'KeyConditionExpression': key_condition}
            if index_name:
                query_kwargs['IndexName'] = index_name
            if filter_expression is not None:
                query_kwargs['FilterExpression'] = filter_expression

            return self._collect_pages(self.table.query, query_kwargs, "Query")

        return _query_items()

    @tracer.capture_method
    def scan_items(
        self,
        filter_expression: Optional[Any] = None,
        context: Optional[ErrorContext] = None,
    ) -> List[Dict[str, Any]]:
        """
        Scan the whole table, following pagination to the last page.

        Args:
            filter_expression: Filter expression
            context: Error context for tracing

        Returns:
            All matching items

        Raises:
            DALError: If DynamoDB operation fails
        """

        @self._handle_dynamodb_errors("Scan", context)
        def _scan_items():
            scan_kwargs: Dict[str, Any] = {}
            if filter_expression is not None:
                scan_kwargs['FilterExpression'] = filter_expression

            return self._collect_pages(self.table.scan, scan_kwargs, "Scan")

        return _scan_items()

    def _collect_pages(self, operation: Callable, kwargs: Dict[str, Any], name: str) -> List[Dict[str, Any]]:
        items: List[Dict[str, Any]] = []
        scanned_count = 0
        pages = 0

        while True:
            response = operation(**kwargs)
            items.extend(from_dynamodb(item) for item in response.get('Items', []))
            scanned_count += response.get('ScannedCount', 0)
            pages += 1

            last_evaluated_key = response.get('LastEvaluatedKey')
            if not last_evaluated_key:
                break
            kwargs['ExclusiveStartKey'] = last_evaluated_key

        logger.info(f"{name} completed successfully", extra={
            "table_name": self.table_name,
            "items_count": len(items),
            "scanned_count": scanned_count,
            "pages": pages,
        })
        return items
