"""
Accept Invitation Use Case

Consumes an invitation token and sets the user's real password.
"""

import logging
from typing import Optional

from src.app.services.invitation_lifecycle import InvitationLifecycle
from src.app.services.password_hasher import PasswordHasher
from src.app.services.store_timeout import bounded
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import Invitation
from src.libs.result import Error, Result, Return

from .dtos import AcceptInvitationResponse

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


def _invalid_or_expired() -> Result:
    return Return.err(
        Error("INVALID_OR_EXPIRED_TOKEN", "Invalid or expired invitation token")
    )


class AcceptInvitationUseCase:
    """
    Use case for accepting an invitation.

    Business Rules:
    - Unknown, consumed and expired tokens all fail with INVALID_OR_EXPIRED_TOKEN
    - Password is trimmed, then must be at least min_password_length characters
      and at most 72 bytes
    - Marking the invitation consumed and replacing the password hash commit
      together or not at all; the conditional consume is the gate, so of
      several concurrent attempts with one token exactly one succeeds
    - A failed attempt is never retried here: a retry could double-apply
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: PasswordHasher,
        lifecycle: InvitationLifecycle,
        min_password_length: int = 8,
        store_timeout: float = 5.0,
    ):
        self.uow = uow
        self.hasher = hasher
        self.lifecycle = lifecycle
        self.min_password_length = min_password_length
        self.store_timeout = store_timeout

    def _validate_password(self, password: str) -> Result[None]:
        if len(password) < self.min_password_length:
            return Return.err(
                Error(
                    "WEAK_PASSWORD",
                    f"Password must be at least {self.min_password_length} characters long",
                )
            )
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            return Return.err(
                Error("WEAK_PASSWORD", f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
            )
        return Return.ok(None)

    async def execute(self, token: str, password: str) -> Result[AcceptInvitationResponse]:
        """
        Execute accept invitation use case.

        Args:
            token: Plaintext invitation token
            password: New password

        Returns:
            Result with AcceptInvitationResponse, or Error
        """
        token = token.strip()
        password = password.strip()
        if not token:
            return _invalid_or_expired()

        found = await bounded(
            self._find(token), self.store_timeout, "accept_invitation.lookup"
        )
        if found.is_err():
            return found
        invitation: Optional[Invitation] = found.value
        if invitation is None:
            return _invalid_or_expired()

        password_validation = self._validate_password(password)
        if password_validation.is_err():
            return password_validation

        # Hash outside the transaction: bcrypt is slow on purpose
        password_hash = self.hasher.hash(password)

        consumed = await bounded(
            self._consume(invitation, password_hash),
            self.store_timeout,
            "accept_invitation.consume",
        )
        if consumed.is_err():
            return consumed

        logger.info(f"Invitation {invitation.id} consumed for user {invitation.user_id}")
        return Return.ok(AcceptInvitationResponse(ok=True))

    async def _find(self, token: str) -> Result[Optional[Invitation]]:
        async with self.uow:
            return Return.ok(await self.lifecycle.find_usable(self.uow, token, utc_now()))

    async def _consume(self, invitation: Invitation, password_hash: str) -> Result[None]:
        async with self.uow:
            try:
                consumed = await self.lifecycle.consume(
                    self.uow, invitation, password_hash, utc_now()
                )
            except LookupError as exc:
                # Leaving the block without commit discards the consumed mark
                logger.error(str(exc))
                return Return.err(
                    Error("INVITATION_TARGET_MISSING", "Invitation target user is missing")
                )
            if not consumed:
                return _invalid_or_expired()
            await self.uow.commit()
            return Return.ok(None)
