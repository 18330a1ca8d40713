"""
Account domain model.

An account is identified by ``userId`` and looked up by its lowercased email.
The stored record carries the bcrypt hash under ``password``; the public view
never does.
"""

from enum import Enum
from typing import Annotated
from uuid import uuid4

from pydantic import Field

from marketplace.models.base import CamelModel, utc_now_iso


class AccountRole(str, Enum):
    """Roles an account can register with."""

    BUYER = 'buyer'
    SELLER = 'seller'


class AccountProfile(CamelModel):
    """Account as returned to callers."""

    user_id: Annotated[str, Field(description='Unique identifier for the account')]
    email: Annotated[str, Field(description='Lowercased email address')]
    name: Annotated[str, Field(description='Display name')]
    role: Annotated[AccountRole, Field(description='Account role')]
    has_storefront: Annotated[bool, Field(
        default=False,
        description='Whether the account owns a storefront'
    )] = False
    created_at: Annotated[str, Field(description='ISO timestamp when the account was created')]


class Account(AccountProfile):
    """Account as stored, including the password hash."""

    password_hash: Annotated[str, Field(
        alias='password',
        description='bcrypt hash of the account password'
    )]

    @classmethod
    def create(cls, email: str, name: str, password_hash: str, role: AccountRole) -> 'Account':
        """Create a new account with generated ID and timestamp."""
        return cls(
            user_id=str(uuid4()),
            email=email.lower(),
            name=name,
            password_hash=password_hash,
            role=role,
            has_storefront=False,
            created_at=utc_now_iso(),
        )

    def to_profile(self) -> AccountProfile:
        """Public view of the account without the password hash."""
        return AccountProfile.model_validate(self.model_dump(exclude={'password_hash'}))
