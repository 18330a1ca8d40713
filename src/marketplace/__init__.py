"""
Marketplace service.

Serverless HTTP handlers for accounts, storefronts, catalog items, reviews and
orders, backed by DynamoDB.
"""

__version__ = "1.0.0"
