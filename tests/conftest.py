"""
Pytest configuration and shared fixtures for the marketplace service.

This module provides common test fixtures and configuration used across
unit, integration, and end-to-end tests.
"""

import json
import os
from typing import Any, Callable, Dict, Optional, Tuple
from unittest.mock import Mock

# Set before any marketplace import so powertools and the env model see them.
os.environ.update({
    "AWS_DEFAULT_REGION": "us-east-1",
    "AWS_REGION": "us-east-1",
    "AWS_ACCESS_KEY_ID": "testing",
    "AWS_SECRET_ACCESS_KEY": "testing",
    "AWS_SECURITY_TOKEN": "testing",
    "AWS_SESSION_TOKEN": "testing",
    "ENVIRONMENT": "dev",
    "JWT_SECRET": "test-jwt-secret",
    "POWERTOOLS_SERVICE_NAME": "test-marketplace",
    "POWERTOOLS_METRICS_NAMESPACE": "TestMarketplace",
    "LOG_LEVEL": "DEBUG",
    "POWERTOOLS_TRACE_DISABLED": "true",  # Disable X-Ray in tests
})

import boto3
import pytest
from moto import mock_aws

from marketplace.handlers.models.env_vars import MarketplaceEnvVars
from marketplace.logic import MarketplaceServices, build_services
from marketplace.models.account import AccountRole

TEST_JWT_SECRET = "test-jwt-secret"

# (table name, primary key, GSI name, GSI key)
TABLE_DEFINITIONS = (
    ("UsersTable", "userId", "EmailIndex", "email"),
    ("StorefrontsTable", "storeId", "OwnerIndex", "owner"),
    ("ItemsTable", "id", "StoreIdIndex", "storeId"),
    ("ReviewsTable", "reviewId", "ItemIdIndex", "itemId"),
    ("OrdersTable", "orderId", "UserIdIndex", "userId"),
)

HANDLER_MODULES = (
    "marketplace.handlers.auth_handler",
    "marketplace.handlers.storefronts_handler",
    "marketplace.handlers.items_handler",
    "marketplace.handlers.reviews_handler",
    "marketplace.handlers.orders_handler",
)


def create_tables(dynamodb: Any, with_indexes: bool = True) -> None:
    """Create the five marketplace tables, optionally with their secondary indexes."""
    for table_name, key, index_name, index_key in TABLE_DEFINITIONS:
        definition: Dict[str, Any] = {
            "TableName": table_name,
            "KeySchema": [{"AttributeName": key, "KeyType": "HASH"}],
            "AttributeDefinitions": [{"AttributeName": key, "AttributeType": "S"}],
            "BillingMode": "PAY_PER_REQUEST",
        }
        if with_indexes:
            definition["AttributeDefinitions"].append({"AttributeName": index_key, "AttributeType": "S"})
            definition["GlobalSecondaryIndexes"] = [
                {
                    "IndexName": index_name,
                    "KeySchema": [{"AttributeName": index_key, "KeyType": "HASH"}],
                    "Projection": {"ProjectionType": "ALL"},
                }
            ]
        table = dynamodb.create_table(**definition)
        table.wait_until_exists()


@pytest.fixture
def env_vars() -> MarketplaceEnvVars:
    """Environment configuration used by the test services."""
    return MarketplaceEnvVars(JWT_SECRET=TEST_JWT_SECRET, AWS_REGION="us-east-1", ENVIRONMENT="dev")


# DynamoDB fixtures
@pytest.fixture
def dynamodb_resource():
    """Mocked DynamoDB resource, no tables."""
    with mock_aws():
        yield boto3.resource("dynamodb", region_name="us-east-1")


@pytest.fixture
def marketplace_tables(dynamodb_resource):
    """All marketplace tables with their secondary indexes."""
    create_tables(dynamodb_resource, with_indexes=True)
    return dynamodb_resource


@pytest.fixture
def unindexed_tables(dynamodb_resource):
    """All marketplace tables without secondary indexes, forcing the scan path."""
    create_tables(dynamodb_resource, with_indexes=False)
    return dynamodb_resource


@pytest.fixture
def services(marketplace_tables, env_vars) -> MarketplaceServices:
    """Services wired against the indexed tables."""
    return build_services(env_vars, dynamodb_resource=marketplace_tables)


@pytest.fixture
def unindexed_services(unindexed_tables, env_vars) -> MarketplaceServices:
    """Services wired against the tables without indexes."""
    return build_services(env_vars, dynamodb_resource=unindexed_tables)


@pytest.fixture
def use_services(monkeypatch) -> Callable[[MarketplaceServices], MarketplaceServices]:
    """Make every handler module resolve the given services."""

    def install(bundle: MarketplaceServices) -> MarketplaceServices:
        for module in HANDLER_MODULES:
            monkeypatch.setattr(f"{module}.get_services", lambda: bundle)
        return bundle

    return install


@pytest.fixture
def lambda_context():
    """Create a mock Lambda context for testing."""
    context = Mock()
    context.function_name = "test-marketplace-function"
    context.function_version = "1"
    context.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:test-marketplace-function"
    context.memory_limit_in_mb = "512"
    context.remaining_time_in_millis = lambda: 30000
    context.aws_request_id = "test-request-id-123"
    context.log_group_name = "/aws/lambda/test-marketplace-function"
    context.log_stream_name = "2024/01/01/[$LATEST]test123"
    return context


@pytest.fixture
def api_event() -> Callable[..., Dict[str, Any]]:
    """Build API Gateway REST proxy events."""

    def build(
        method: str,
        path: str,
        body: Optional[Any] = None,
        query: Optional[Dict[str, str]] = None,
        token: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        request_headers = {"Content-Type": "application/json", "User-Agent": "test-agent/1.0"}
        if token is not None:
            request_headers["Authorization"] = f"Bearer {token}"
        request_headers.update(headers or {})

        return {
            "resource": path,
            "path": path,
            "httpMethod": method,
            "headers": request_headers,
            "multiValueHeaders": {name: [value] for name, value in request_headers.items()},
            "queryStringParameters": query,
            "multiValueQueryStringParameters": {name: [value] for name, value in query.items()} if query else None,
            "pathParameters": None,
            "stageVariables": None,
            "requestContext": {
                "requestId": "test-request-id-123",
                "accountId": "123456789012",
                "stage": "test",
                "resourcePath": path,
                "httpMethod": method,
                "path": path,
                "protocol": "HTTP/1.1",
                "requestTime": "01/Jan/2024:12:00:00 +0000",
                "requestTimeEpoch": 1704110400000,
                "identity": {
                    "sourceIp": "127.0.0.1",
                    "userAgent": "test-agent/1.0",
                },
            },
            "body": body if body is None or isinstance(body, str) else json.dumps(body),
            "isBase64Encoded": False,
        }

    return build


def parse_response(response: Dict[str, Any]) -> Tuple[int, Dict[str, str], Any]:
    """Status code, flattened headers and decoded JSON body of a proxy response."""
    headers: Dict[str, str] = dict(response.get("headers") or {})
    for name, values in (response.get("multiValueHeaders") or {}).items():
        headers[name] = values[-1] if isinstance(values, list) else values
    body = json.loads(response["body"]) if response.get("body") else None
    return response["statusCode"], headers, body


@pytest.fixture
def read_response() -> Callable[[Dict[str, Any]], Tuple[int, Dict[str, str], Any]]:
    return parse_response


@pytest.fixture
def issue_token(services) -> Callable[..., str]:
    """Sign a bearer token with the test secret."""

    def issue(user_id: str = "user-1", role: AccountRole = AccountRole.BUYER, email: str = "buyer@example.com") -> str:
        return services.authenticator.issue_token(user_id=user_id, email=email, role=role)

    return issue


# Integration test fixtures
@pytest.fixture
def integration_client():
    """HTTP client for a deployed stage."""
    import httpx

    base_url = os.environ.get("API_BASE_URL")
    if not base_url:
        pytest.skip("API_BASE_URL not set")

    with httpx.Client(base_url=base_url, timeout=30.0) as client:
        yield client


# Error simulation fixtures
@pytest.fixture
def mock_dynamodb_error():
    """Build botocore ClientErrors for error handling tests."""
    from botocore.exceptions import ClientError

    def create_error(error_code: str, message: str = "Test error"):
        return ClientError(
            error_response={
                "Error": {
                    "Code": error_code,
                    "Message": message,
                }
            },
            operation_name="TestOperation"
        )

    return create_error


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "e2e" in str(item.fspath):
            item.add_marker(pytest.mark.e2e)
