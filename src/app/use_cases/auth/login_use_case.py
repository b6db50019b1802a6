"""
Login Use Case

Verifies credentials inside one service provider and issues a session token.
"""

import logging
from typing import Optional
from uuid import UUID

from src.api.utils.jwt import SessionTokenSigner
from src.app.services.password_hasher import PasswordHasher
from src.app.services.store_timeout import bounded
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User
from src.libs.result import Error, Result, Return
from .dtos import LoginResponse, UserInfo

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login and session token issuance.

    Business Rules:
    - Email is trimmed and lower-cased before lookup
    - Unknown (provider, email) and wrong password give the same
      INVALID_CREDENTIALS, and both spend one bcrypt computation
    - Users still waiting on their invitation cannot log in (unset hash)
    - Disabled users get ACCOUNT_DISABLED, only after the password verified
    - Token carries user id, provider id, role and customer id; 24h expiry
    - Nothing is persisted: the token is self-contained
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: PasswordHasher,
        signer: SessionTokenSigner,
        store_timeout: float = 5.0,
    ):
        self.uow = uow
        self.hasher = hasher
        self.signer = signer
        self.store_timeout = store_timeout

    async def execute(
        self, service_provider_id: UUID, email: str, password: str
    ) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            service_provider_id: Tenant the user logs into
            email: User email
            password: Plain text password

        Returns:
            Result with LoginResponse containing the session token, or Error
        """
        email = email.strip().lower()

        lookup = await bounded(
            self._find_user(service_provider_id, email), self.store_timeout, "login"
        )
        if lookup.is_err():
            return lookup
        user: Optional[User] = lookup.value

        if user is None:
            # Same cost as a real comparison
            self.hasher.dummy_verify(password)
            return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

        if not self.hasher.verify(password, user.password_hash):
            return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

        if not user.is_active:
            return Return.err(Error("ACCOUNT_DISABLED", "User account is disabled"))

        issued = self.signer.issue(
            user.id, user.service_provider_id, user.role, user.customer_id
        )
        logger.info(f"User {user.id} logged in to provider {user.service_provider_id}")

        return Return.ok(
            LoginResponse(
                access_token=issued.token,
                expires_at=issued.expires_at.isoformat(),
                user=UserInfo(
                    id=str(user.id),
                    service_provider_id=str(user.service_provider_id),
                    customer_id=str(user.customer_id) if user.customer_id else None,
                    fullname=user.fullname,
                    email=user.email,
                    role=user.role.value,
                ),
            )
        )

    async def _find_user(self, service_provider_id: UUID, email: str) -> Result[Optional[User]]:
        async with self.uow:
            user = await self.uow.users.get_by_tenant_and_email(service_provider_id, email)
            return Return.ok(user)
