"""
Unit tests for the handler environment model.
"""

import pytest
from pydantic import ValidationError

from marketplace.handlers.models.env_vars import MarketplaceEnvVars, get_handler_env_vars


def test_reads_process_environment():
    env_vars = get_handler_env_vars()

    assert isinstance(env_vars, MarketplaceEnvVars)
    assert env_vars.JWT_SECRET == "test-jwt-secret"
    assert env_vars.AWS_REGION == "us-east-1"
    assert env_vars.USERS_TABLE == "UsersTable"
    assert env_vars.TOKEN_TTL_DAYS == 7


@pytest.mark.parametrize("environment, rounds", [("prod", 10), ("staging", 4), ("dev", 4)])
def test_bcrypt_rounds_by_environment(environment, rounds):
    env_vars = MarketplaceEnvVars(JWT_SECRET="secret", ENVIRONMENT=environment)

    assert env_vars.bcrypt_rounds == rounds
    assert env_vars.is_production is (environment == "prod")


@pytest.mark.parametrize("overrides", [
    {},
    {"JWT_SECRET": ""},
    {"JWT_SECRET": "secret", "ENVIRONMENT": "qa"},
    {"JWT_SECRET": "secret", "TOKEN_TTL_DAYS": 0},
])
def test_invalid_configuration_rejected(overrides):
    with pytest.raises(ValidationError):
        MarketplaceEnvVars(**overrides)
