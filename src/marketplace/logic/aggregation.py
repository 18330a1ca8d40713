"""
Read-time aggregation over lookup results.

Nothing here is stored: ratings are averaged and records ordered on every read,
and order lines are enriched with the current catalog record of their item.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Dict, Iterable, List, Optional, Type, TypeVar

from aws_lambda_powertools.metrics import MetricUnit
from pydantic import BaseModel, ValidationError

from marketplace.handlers.utils.errors import BaseServiceError
from marketplace.handlers.utils.observability import logger, metrics, tracer

ModelT = TypeVar('ModelT', bound=BaseModel)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def average_rating(reviews: Iterable[Dict[str, Any]]) -> float:
    """
    Mean of the numeric ``rating`` values, rounded half up to one decimal.

    Records without a numeric rating are ignored; no ratings at all gives 0.
    """
    ratings = [
        review['rating'] for review in reviews
        if isinstance(review.get('rating'), (int, float)) and not isinstance(review.get('rating'), bool)
    ]
    if not ratings:
        return 0
    mean = Decimal(str(sum(ratings) / len(ratings)))
    return float(mean.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP))


def _created_at(record: Dict[str, Any]) -> datetime:
    value = record.get('createdAt')
    if not isinstance(value, str):
        return _OLDEST
    try:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return _OLDEST
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def newest_first(records: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Records sorted by ``createdAt`` descending; ties keep their input order."""
    return sorted(records, key=_created_at, reverse=True)


def parse_records(records: Iterable[Dict[str, Any]], model: Type[ModelT]) -> List[ModelT]:
    """Validate stored records, skipping (and logging) the ones that no longer fit the model."""
    parsed: List[ModelT] = []
    for record in records:
        try:
            parsed.append(model.model_validate(record))
        except ValidationError as e:
            logger.warning(f"Skipping unparsable {model.__name__} record", extra={
                "error_count": e.error_count(),
                "record_keys": sorted(record.keys()),
            })
            metrics.add_metric(name="UnparsableRecord", unit=MetricUnit.Count, value=1)
    return parsed


def _copy_order(order: Dict[str, Any]) -> Dict[str, Any]:
    items = order.get('items')
    if not isinstance(items, list):
        return dict(order)
    return dict(order, items=[dict(line) if isinstance(line, dict) else line for line in items])


@tracer.capture_method
def enrich_order_lines(
    orders: List[Dict[str, Any]],
    fetch_item: Callable[[str], Optional[Dict[str, Any]]],
    max_workers: int = 8,
) -> List[Dict[str, Any]]:
    """
    Attach ``itemDetails`` to every line of every order.

    Lookups run concurrently. A lookup that fails or finds nothing sets
    ``itemDetails`` to None for that line only. Orders whose ``items`` is not a
    list, and lines that are not objects, are passed through untouched.

    Args:
        orders: Order records as read from the table
        fetch_item: Point lookup returning the catalog record for an item id, or None
        max_workers: Thread pool size

    Returns:
        New order records with enriched lines, in the input order
    """
    enriched = [_copy_order(order) for order in orders]
    lines = [
        line
        for order in enriched if isinstance(order.get('items'), list)
        for line in order['items'] if isinstance(line, dict)
    ]
    if not lines:
        return enriched

    failures = 0
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(lines)))) as executor:
        future_to_line = {
            executor.submit(fetch_item, line.get('itemId')): line
            for line in lines
        }

        for future in as_completed(future_to_line):
            line = future_to_line[future]
            try:
                line['itemDetails'] = future.result()
            except (BaseServiceError, ValidationError) as e:
                failures += 1
                logger.warning("Item lookup failed, leaving details empty", extra={
                    "item_id": line.get('itemId'),
                    "error": str(e),
                })
                line['itemDetails'] = None
            except Exception:
                failures += 1
                logger.exception("Unexpected error during item lookup, leaving details empty", extra={
                    "item_id": line.get('itemId'),
                })
                line['itemDetails'] = None

    if failures:
        metrics.add_metric(name="OrderLineEnrichmentFailure", unit=MetricUnit.Count, value=failures)

    logger.debug("Order lines enriched", extra={
        "orders_count": len(enriched),
        "lines_count": len(lines),
        "failures": failures,
    })
    return enriched
