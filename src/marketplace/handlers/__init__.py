"""
AWS Lambda Handlers Module.

One module per marketplace resource (auth, storefronts, items, reviews,
orders), each exposing its own resolver ``app`` and ``lambda_handler``.
Handlers parse requests, call the logic layer and shape responses.
"""

from marketplace.handlers.utils.observability import logger, metrics, tracer

__all__ = [
    "logger",
    "metrics",
    "tracer",
]
