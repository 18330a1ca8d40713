"""
Business Logic Layer for accounts and authentication.

Registration, login and profile reads. Emails are lowercased before any lookup
or write; the stored password hash never leaves this module.
"""

from typing import Optional

from aws_lambda_powertools.metrics import MetricUnit
from pydantic import ValidationError as PydanticValidationError

from marketplace.dal.dynamodb_handler import DynamoDBHandler
from marketplace.dal.lookup import ACCOUNTS_BY_EMAIL, find_by
from marketplace.handlers.utils.errors import (
    AuthenticationError,
    ConflictError,
    ErrorContext,
    ResourceNotFoundError,
)
from marketplace.handlers.utils.observability import logger, metrics, tracer
from marketplace.models.account import Account
from marketplace.models.input import LoginRequest, RegisterRequest
from marketplace.models.output import AuthOutput, ProfileOutput
from marketplace.security.auth import JWTAuthenticator, UserClaims
from marketplace.security.passwords import PasswordHasher

INVALID_CREDENTIALS = "Invalid email or password"


class AccountService:
    """Business logic service for accounts."""

    def __init__(
        self,
        users_table_handler: DynamoDBHandler,
        authenticator: JWTAuthenticator,
        password_hasher: PasswordHasher,
    ):
        self.users_dal = users_table_handler
        self.authenticator = authenticator
        self.password_hasher = password_hasher

    def _issue_token(self, account: Account) -> str:
        return self.authenticator.issue_token(
            user_id=account.user_id,
            email=account.email,
            role=account.role,
        )

    @tracer.capture_method
    def find_by_email(self, email: str, context: Optional[ErrorContext] = None) -> Optional[Account]:
        """Look an account up by (lowercased) email."""
        result = find_by(self.users_dal, ACCOUNTS_BY_EMAIL, email.lower(), context=context)
        for record in result.items:
            try:
                return Account.model_validate(record)
            except PydanticValidationError:
                logger.warning("Skipping unparsable account record", extra={"user_id": record.get('userId')})
        return None

    @tracer.capture_method
    def get_account(self, user_id: str, context: Optional[ErrorContext] = None) -> Account:
        """
        Read an account by id.

        Raises:
            ResourceNotFoundError: If no such account exists
            DALError: If database operation fails
        """
        record = self.users_dal.get_item(key={'userId': user_id}, context=context)
        if not record:
            raise ResourceNotFoundError(resource_type="User", resource_id=user_id, context=context)
        return Account.model_validate(record)

    @tracer.capture_method
    def register(self, request: RegisterRequest, context: ErrorContext) -> AuthOutput:
        """
        Register a new account and sign a token for it.

        Args:
            request: Validated registration request
            context: Error context for tracing

        Returns:
            Public account view and bearer token

        Raises:
            ConflictError: If an account with the same email exists
            DALError: If database operation fails
        """
        logger.info("Registering account", extra={"role": request.role.value, "request_id": context.request_id})

        if self.find_by_email(request.email, context=context) is not None:
            metrics.add_metric(name="DuplicateRegistration", unit=MetricUnit.Count, value=1)
            raise ConflictError("User with this email already exists", context=context)

        account = Account.create(
            email=request.email,
            name=request.name,
            password_hash=self.password_hasher.hash(request.password),
            role=request.role,
        )
        self.users_dal.put_item(item=account.to_record(), context=context)

        metrics.add_metric(name="AccountRegistered", unit=MetricUnit.Count, value=1)
        logger.info("Account registered", extra={"user_id": account.user_id})

        return AuthOutput(
            message="User created successfully",
            user=account.to_profile(),
            token=self._issue_token(account),
        )

    @tracer.capture_method
    def login(self, request: LoginRequest, context: ErrorContext) -> AuthOutput:
        """
        Verify credentials and sign a token.

        Unknown email and wrong password fail identically.

        Raises:
            AuthenticationError: If the credentials do not match
            DALError: If database operation fails
        """
        account = self.find_by_email(request.email, context=context)
        if account is None or not self.password_hasher.verify(request.password, account.password_hash):
            metrics.add_metric(name="LoginFailure", unit=MetricUnit.Count, value=1)
            raise AuthenticationError(INVALID_CREDENTIALS, context=context)

        metrics.add_metric(name="LoginSuccess", unit=MetricUnit.Count, value=1)
        logger.info("Login successful", extra={"user_id": account.user_id})

        return AuthOutput(
            message="Login successful",
            user=account.to_profile(),
            token=self._issue_token(account),
        )

    @tracer.capture_method
    def get_profile(self, claims: UserClaims, context: ErrorContext) -> ProfileOutput:
        """Return the caller's own account."""
        account = self.get_account(claims.user_id, context=context)
        return ProfileOutput(user=account.to_profile())
