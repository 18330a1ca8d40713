"""
Resilient lookup by secondary attribute.

``find_by`` resolves "all records where A = V [and B = W]" against a table
whether or not the secondary index on A exists. The index query is tried
first; when the index is unavailable the same predicate is evaluated by a full
scan. Both paths build their conditions from one ``LookupPredicate`` so the two
result sets are always the same.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from aws_lambda_powertools.metrics import MetricUnit
from boto3.dynamodb.conditions import Attr, ConditionBase, Key

from marketplace.dal.dynamodb_handler import DALError, DynamoDBHandler
from marketplace.handlers.utils.errors import ErrorContext
from marketplace.handlers.utils.observability import logger, metrics, tracer


@dataclass(frozen=True)
class SecondaryIndex:
    """A global secondary index and the attribute it is keyed on."""

    name: str
    key_attr: str


ACCOUNTS_BY_EMAIL = SecondaryIndex(name='EmailIndex', key_attr='email')
STOREFRONTS_BY_OWNER = SecondaryIndex(name='OwnerIndex', key_attr='owner')
ITEMS_BY_STOREFRONT = SecondaryIndex(name='StoreIdIndex', key_attr='storeId')
REVIEWS_BY_ITEM = SecondaryIndex(name='ItemIdIndex', key_attr='itemId')
ORDERS_BY_ACCOUNT = SecondaryIndex(name='UserIdIndex', key_attr='userId')

REGISTERED_INDEXES: Tuple[SecondaryIndex, ...] = (
    ACCOUNTS_BY_EMAIL,
    STOREFRONTS_BY_OWNER,
    ITEMS_BY_STOREFRONT,
    REVIEWS_BY_ITEM,
    ORDERS_BY_ACCOUNT,
)


class LookupPath(str, Enum):
    """Which code path produced a lookup result."""

    INDEX = 'index'
    SCAN = 'scan'


@dataclass(frozen=True)
class LookupPredicate:
    """Equality on the index key plus an optional equality filter."""

    index: SecondaryIndex
    key_value: Any
    extra_filter: Optional[Tuple[str, Any]] = None

    def key_condition(self) -> ConditionBase:
        return Key(self.index.key_attr).eq(self.key_value)

    def filter_condition(self) -> Optional[ConditionBase]:
        if self.extra_filter is None:
            return None
        attribute, value = self.extra_filter
        return Attr(attribute).eq(value)

    def scan_condition(self) -> ConditionBase:
        condition = Attr(self.index.key_attr).eq(self.key_value)
        extra = self.filter_condition()
        return condition & extra if extra is not None else condition


@dataclass(frozen=True)
class IndexQueryResult:
    """Outcome of the index path: either available with items or unavailable."""

    available: bool
    items: Tuple[Dict[str, Any], ...] = ()
    reason: Optional[str] = None

    @classmethod
    def found(cls, items: List[Dict[str, Any]]) -> 'IndexQueryResult':
        return cls(available=True, items=tuple(items))

    @classmethod
    def unavailable(cls, reason: str) -> 'IndexQueryResult':
        return cls(available=False, reason=reason)


@dataclass(frozen=True)
class LookupResult:
    """Records matched by ``find_by`` and the path that produced them."""

    items: List[Dict[str, Any]]
    path: LookupPath


def query_index(
    table: DynamoDBHandler,
    predicate: LookupPredicate,
    context: Optional[ErrorContext] = None,
) -> IndexQueryResult:
    """Run the index path. Never raises; failures come back as unavailable."""
    try:
        items = table.query_items(
            key_condition=predicate.key_condition(),
            index_name=predicate.index.name,
            filter_expression=predicate.filter_condition(),
            context=context,
        )
    except DALError as e:
        return IndexQueryResult.unavailable(reason=e.error_code)
    return IndexQueryResult.found(items)


@tracer.capture_method
def find_by(
    table: DynamoDBHandler,
    index: SecondaryIndex,
    key_value: Any,
    extra_filter: Optional[Tuple[str, Any]] = None,
    use_index: bool = True,
    context: Optional[ErrorContext] = None,
) -> LookupResult:
    """
    Find all records where ``index.key_attr == key_value`` (and the extra filter holds).

    Args:
        table: Table handler to read from
        index: Secondary index to try first
        key_value: Value the index key must equal
        extra_filter: Optional ``(attribute, value)`` equality applied after the key match
        use_index: Set to False to go straight to the scan path
        context: Error context for tracing

    Returns:
        LookupResult with the matching records and the path taken

    Raises:
        DALError: Only if the scan path fails
    """
    predicate = LookupPredicate(index=index, key_value=key_value, extra_filter=extra_filter)

    if use_index:
        outcome = query_index(table, predicate, context=context)
        if outcome.available:
            logger.debug("Index lookup succeeded", extra={
                "table_name": table.table_name,
                "index_name": index.name,
                "items_count": len(outcome.items),
            })
            return LookupResult(items=list(outcome.items), path=LookupPath.INDEX)

        logger.warning("Secondary index unavailable, falling back to scan", extra={
            "table_name": table.table_name,
            "index_name": index.name,
            "reason": outcome.reason,
        })
        metrics.add_metric(name="IndexFallbackToScan", unit=MetricUnit.Count, value=1)

    items = table.scan_items(filter_expression=predicate.scan_condition(), context=context)
    tracer.put_annotation("lookup_path", LookupPath.SCAN.value)
    return LookupResult(items=items, path=LookupPath.SCAN)
