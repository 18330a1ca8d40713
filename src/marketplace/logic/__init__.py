"""
Business Logic Layer Module.

This module contains the marketplace services. ``MarketplaceServices`` bundles
them, built once from configuration and handed to the handlers explicitly.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Optional

from marketplace.dal import MarketplaceTables, get_marketplace_tables
from marketplace.handlers.models.env_vars import MarketplaceEnvVars
from marketplace.logic.account_service import AccountService
from marketplace.logic.catalog_service import CatalogService
from marketplace.logic.order_service import OrderService
from marketplace.logic.review_service import ReviewService
from marketplace.logic.storefront_service import StorefrontService
from marketplace.security import JWTAuthenticator, PasswordHasher


@dataclass(frozen=True)
class MarketplaceServices:
    """Everything a handler needs, wired from one configuration."""

    tables: MarketplaceTables
    authenticator: JWTAuthenticator
    accounts: AccountService
    storefronts: StorefrontService
    catalog: CatalogService
    reviews: ReviewService
    orders: OrderService


def build_services(env_vars: MarketplaceEnvVars, dynamodb_resource: Optional[Any] = None) -> MarketplaceServices:
    """
    Wire the services from validated configuration.

    Args:
        env_vars: Validated environment configuration
        dynamodb_resource: Optional shared boto3 DynamoDB resource

    Returns:
        MarketplaceServices bundle
    """
    tables = get_marketplace_tables(env_vars, dynamodb_resource=dynamodb_resource)
    authenticator = JWTAuthenticator(
        secret_key=env_vars.JWT_SECRET,
        token_ttl=timedelta(days=env_vars.TOKEN_TTL_DAYS),
    )
    hasher = PasswordHasher(rounds=env_vars.bcrypt_rounds)

    return MarketplaceServices(
        tables=tables,
        authenticator=authenticator,
        accounts=AccountService(tables.users, authenticator, hasher),
        storefronts=StorefrontService(tables.storefronts, tables.users),
        catalog=CatalogService(tables.items),
        reviews=ReviewService(tables.reviews, tables.items),
        orders=OrderService(tables.orders, tables.items),
    )


__all__ = [
    'AccountService',
    'CatalogService',
    'MarketplaceServices',
    'OrderService',
    'ReviewService',
    'StorefrontService',
    'build_services',
]
