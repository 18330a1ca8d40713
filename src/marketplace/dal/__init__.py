"""
Data Access Layer (DAL) for the marketplace service.

This module exposes the table handlers used by the logic layer. Handlers are
built explicitly from configuration and passed down, never read from module
globals.
"""

from dataclasses import dataclass
from typing import Optional

import boto3

from marketplace.dal.dynamodb_handler import DALError, DynamoDBHandler
from marketplace.dal.lookup import LookupPath, LookupResult, SecondaryIndex, find_by
from marketplace.handlers.models.env_vars import MarketplaceEnvVars


@dataclass(frozen=True)
class MarketplaceTables:
    """One handler per marketplace table."""

    users: DynamoDBHandler
    storefronts: DynamoDBHandler
    items: DynamoDBHandler
    reviews: DynamoDBHandler
    orders: DynamoDBHandler


def get_marketplace_tables(
    env_vars: MarketplaceEnvVars,
    dynamodb_resource: Optional[object] = None,
) -> MarketplaceTables:
    """
    Factory function to build the table handlers.

    Args:
        env_vars: Validated environment configuration
        dynamodb_resource: Optional shared boto3 DynamoDB resource

    Returns:
        MarketplaceTables bundle sharing one DynamoDB resource
    """
    if dynamodb_resource is None:
        session_config = {'region_name': env_vars.AWS_REGION}
        if env_vars.DYNAMODB_ENDPOINT:
            session_config['endpoint_url'] = env_vars.DYNAMODB_ENDPOINT
        dynamodb_resource = boto3.resource('dynamodb', **session_config)

    def handler(table_name: str) -> DynamoDBHandler:
        return DynamoDBHandler(table_name, dynamodb_resource=dynamodb_resource)

    return MarketplaceTables(
        users=handler(env_vars.USERS_TABLE),
        storefronts=handler(env_vars.STOREFRONTS_TABLE),
        items=handler(env_vars.ITEMS_TABLE),
        reviews=handler(env_vars.REVIEWS_TABLE),
        orders=handler(env_vars.ORDERS_TABLE),
    )


__all__ = [
    'DALError',
    'DynamoDBHandler',
    'LookupPath',
    'LookupResult',
    'MarketplaceTables',
    'SecondaryIndex',
    'find_by',
    'get_marketplace_tables',
]
