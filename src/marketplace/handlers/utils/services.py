"""
Per-container service wiring.

Services are built once per Lambda container from the environment and handed
to each request through the resolver context.
"""

from functools import lru_cache

from marketplace.handlers.models.env_vars import get_handler_env_vars
from marketplace.handlers.utils.observability import logger
from marketplace.logic import MarketplaceServices, build_services


@lru_cache(maxsize=1)
def get_services() -> MarketplaceServices:
    env_vars = get_handler_env_vars()
    logger.info("Building marketplace services", extra={"environment": env_vars.ENVIRONMENT})
    return build_services(env_vars)
