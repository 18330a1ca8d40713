"""
Environment variable models for type-safe configuration.

This module defines the Pydantic model for environment variables shared by all
marketplace Lambda handlers.
"""

from typing import Annotated, Optional

from aws_lambda_env_modeler import get_environment_variables
from pydantic import BaseModel, Field


class MarketplaceEnvVars(BaseModel):
    """Environment variables for marketplace handlers."""

    # DynamoDB table names
    USERS_TABLE: Annotated[str, Field(
        default='UsersTable',
        description='DynamoDB table holding accounts',
        min_length=1
    )] = 'UsersTable'

    STOREFRONTS_TABLE: Annotated[str, Field(
        default='StorefrontsTable',
        description='DynamoDB table holding storefronts',
        min_length=1
    )] = 'StorefrontsTable'

    ITEMS_TABLE: Annotated[str, Field(
        default='ItemsTable',
        description='DynamoDB table holding catalog items',
        min_length=1
    )] = 'ItemsTable'

    REVIEWS_TABLE: Annotated[str, Field(
        default='ReviewsTable',
        description='DynamoDB table holding reviews',
        min_length=1
    )] = 'ReviewsTable'

    ORDERS_TABLE: Annotated[str, Field(
        default='OrdersTable',
        description='DynamoDB table holding orders',
        min_length=1
    )] = 'OrdersTable'

    # Token signing
    JWT_SECRET: Annotated[str, Field(
        description='Secret used to sign and verify bearer tokens',
        min_length=1
    )]

    TOKEN_TTL_DAYS: Annotated[int, Field(
        default=7,
        description='Bearer token validity window in days',
        ge=1,
        le=30
    )] = 7

    # AWS region
    AWS_REGION: Annotated[str, Field(
        default='us-west-2',
        description='AWS region for service deployment'
    )] = 'us-west-2'

    # Local DynamoDB endpoint, unset in deployed stages
    DYNAMODB_ENDPOINT: Annotated[Optional[str], Field(
        default=None,
        description='DynamoDB endpoint URL override for local testing'
    )] = None

    # Environment name (dev, staging, prod)
    ENVIRONMENT: Annotated[str, Field(
        default='dev',
        description='Deployment environment name',
        pattern=r'^(dev|staging|prod)$'
    )] = 'dev'

    # Service name for observability
    POWERTOOLS_SERVICE_NAME: Annotated[str, Field(
        default='marketplace',
        description='Service name for AWS Powertools'
    )] = 'marketplace'

    # Log level for AWS Powertools Logger
    LOG_LEVEL: Annotated[str, Field(
        default='INFO',
        description='Log level for application logging',
        pattern=r'^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$'
    )] = 'INFO'

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == 'prod'

    @property
    def bcrypt_rounds(self) -> int:
        """Password hashing cost, 10 in production and 4 elsewhere."""
        return 10 if self.is_production else 4


def get_handler_env_vars() -> MarketplaceEnvVars:
    """
    Get typed environment variables for Lambda handlers.

    Returns:
        Validated environment variables model instance
    """
    return get_environment_variables(model=MarketplaceEnvVars)
