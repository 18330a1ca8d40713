"""
Bearer token authentication for the marketplace handlers.

Tokens are HS256 JWTs carrying the account id, email and role. Every
verification failure (missing header, bad signature, malformed token, expiry)
is reported the same way to the caller: a 401.
"""

import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from aws_lambda_powertools.metrics import MetricUnit
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from marketplace.handlers.utils.errors import AuthenticationError, AuthorizationError, ErrorContext
from marketplace.handlers.utils.observability import logger, metrics, tracer
from marketplace.models.account import AccountRole

BEARER_PREFIX = 'Bearer '


@dataclass(frozen=True)
class UserClaims:
    """User claims from a verified bearer token."""

    user_id: str
    email: str
    role: AccountRole
    issued_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None

    def has_role(self, role: AccountRole) -> bool:
        """Check if user has specific role."""
        return self.role == role


class JWTAuthenticator:
    """Issues and verifies HS256 bearer tokens."""

    def __init__(self, secret_key: str, token_ttl: timedelta = timedelta(days=7), algorithm: str = "HS256"):
        """
        Initialize JWT authenticator.

        Args:
            secret_key: Secret key for HMAC signing
            token_ttl: Validity window of issued tokens
            algorithm: JWT algorithm
        """
        self.secret_key = secret_key
        self.token_ttl = token_ttl
        self.algorithm = algorithm

    def issue_token(self, user_id: str, email: str, role: AccountRole) -> str:
        """Sign a token for the given account."""
        now = datetime.now(timezone.utc)
        payload = {
            'userId': user_id,
            'email': email,
            'role': AccountRole(role).value,
            'iat': now,
            'exp': now + self.token_ttl,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    @tracer.capture_method
    def authenticate(self, authorization_header: Optional[str], context: Optional[ErrorContext] = None) -> UserClaims:
        """
        Verify the Authorization header and return the caller's claims.

        Raises:
            AuthenticationError: If the header is missing or the token does not verify
        """
        if not authorization_header or not authorization_header.startswith(BEARER_PREFIX):
            metrics.add_metric(name="AuthenticationFailure", unit=MetricUnit.Count, value=1)
            raise AuthenticationError("Unauthorized: No token provided", context=context)

        token = authorization_header[len(BEARER_PREFIX):].strip()
        start_time = time.time()

        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={'require': ['exp', 'userId', 'role']},
            )
            claims = self._extract_user_claims(payload)
        except ExpiredSignatureError:
            logger.info("Bearer token expired")
            metrics.add_metric(name="AuthenticationFailure", unit=MetricUnit.Count, value=1)
            raise AuthenticationError("Invalid or expired token", context=context)
        except (InvalidTokenError, KeyError, ValueError) as e:
            logger.info("Bearer token rejected", extra={"reason": str(e)})
            metrics.add_metric(name="AuthenticationFailure", unit=MetricUnit.Count, value=1)
            raise AuthenticationError("Invalid or expired token", context=context)

        tracer.put_annotation("user_id", claims.user_id)
        logger.debug("Bearer token verified", extra={
            "user_id": claims.user_id,
            "duration_ms": round((time.time() - start_time) * 1000, 2),
        })
        return claims

    def _extract_user_claims(self, payload: Dict[str, Any]) -> UserClaims:
        issued_at = payload.get('iat')
        expires_at = payload.get('exp')
        return UserClaims(
            user_id=str(payload['userId']),
            email=str(payload.get('email', '')),
            role=AccountRole(payload['role']),
            issued_at=datetime.fromtimestamp(issued_at, tz=timezone.utc) if issued_at else None,
            expires_at=datetime.fromtimestamp(expires_at, tz=timezone.utc) if expires_at else None,
        )


def require_role(claims: UserClaims, role: AccountRole, message: str, context: Optional[ErrorContext] = None) -> None:
    """
    Raise unless the caller holds ``role``.

    Raises:
        AuthorizationError: If the caller's role differs
    """
    if not claims.has_role(role):
        metrics.add_metric(name="AuthorizationFailure", unit=MetricUnit.Count, value=1)
        raise AuthorizationError(message, context=context)
