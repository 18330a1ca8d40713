"""
Security Module for the marketplace handlers.

This module provides bearer token authentication, role checks and password
hashing.
"""

from .auth import JWTAuthenticator, UserClaims, require_role
from .passwords import PasswordHasher

__all__ = [
    'JWTAuthenticator',
    'PasswordHasher',
    'UserClaims',
    'require_role',
]
