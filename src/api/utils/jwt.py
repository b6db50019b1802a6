"""
Signed session tokens

HS256 JWTs carrying {uid, spid, role, cid}. The signer is built once at
startup from configuration and shared read-only by every request.
"""

from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError

from src.domain.entities import UserRole
from src.domain.identity_context import IdentityContext
from src.libs.result import Error, Result, Return

# Pinned: tokens announcing any other "alg" header are rejected
ALGORITHM = "HS256"
INVALID_TOKEN = "INVALID_TOKEN"


class IssuedToken(BaseModel):
    token: str
    expires_at: datetime


class SessionTokenSigner:
    """Issues and verifies session tokens with one symmetric key."""

    def __init__(self, secret: str, ttl: timedelta = timedelta(hours=24)):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self.ttl = ttl

    def issue(
        self,
        user_id: UUID,
        service_provider_id: UUID,
        role: UserRole,
        customer_id: Optional[UUID] = None,
    ) -> IssuedToken:
        """
        Generate a session token

        Args:
            user_id: User UUID
            service_provider_id: Tenant UUID
            role: User role
            customer_id: Customer UUID for client users

        Returns:
            IssuedToken with the JWT string and its expiry
        """
        now = datetime.now(UTC).replace(microsecond=0)
        expires_at = now + self.ttl
        payload = {
            "uid": str(user_id),
            "spid": str(service_provider_id),
            "cid": str(customer_id) if customer_id is not None else None,
            "role": UserRole(role).value,
            "iat": now,
            "exp": expires_at,
        }
        token = jwt.encode(payload, self._secret, algorithm=ALGORITHM)
        return IssuedToken(token=token, expires_at=expires_at)

    def verify(self, token: str) -> Result[IdentityContext]:
        """
        Verify and decode a session token

        Every failure (garbled, bad signature, other algorithm, expired,
        missing claims) yields the same INVALID_TOKEN error.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require_exp": True, "require_iat": True},
            )
            customer_id = payload.get("cid")
            identity = IdentityContext(
                user_id=payload["uid"],
                service_provider_id=payload["spid"],
                role=payload["role"],
                customer_id=customer_id if customer_id else None,
                issued_at=datetime.fromtimestamp(payload["iat"], UTC),
                expires_at=datetime.fromtimestamp(payload["exp"], UTC),
            )
        except (JWTError, KeyError, TypeError, ValueError, ValidationError):
            return Return.err(Error(INVALID_TOKEN, "Invalid or expired token"))
        return Return.ok(identity)
