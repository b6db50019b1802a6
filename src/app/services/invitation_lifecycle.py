"""
Invitation Lifecycle

Issues invitations for login-disabled users and consumes them. The caller
owns the transaction: issue() and consume() only stage writes on the unit of
work, and nothing is visible until the caller commits.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional, Tuple

from src.app.services.invitation_tokens import hash_invitation_token, new_invitation_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Invitation, User
from src.domain.identity_context import IdentityContext

logger = logging.getLogger(__name__)


class InvitationLifecycle:
    def __init__(self, ttl: timedelta = timedelta(hours=48)):
        self.ttl = ttl

    async def issue(
        self, uow: UnitOfWork, issued_by: IdentityContext, user: User, now: datetime
    ) -> Tuple[str, Invitation]:
        """
        Stage a new invitation for user.

        Returns:
            (plaintext token, invitation). The plaintext exists only in this
            return value; the row stores its hash.
        """
        plaintext, token_hash = new_invitation_token()
        invitation = Invitation(
            service_provider_id=user.service_provider_id,
            user_id=user.id,
            created_by=issued_by.user_id,
            token_hash=token_hash,
            expires_at=now + self.ttl,
        )
        invitation = await uow.invitations.create(invitation)
        logger.info(f"Invitation {invitation.id} staged for user {user.id}")
        return plaintext, invitation

    async def find_usable(
        self, uow: UnitOfWork, plaintext: str, now: datetime
    ) -> Optional[Invitation]:
        return await uow.invitations.get_usable_by_token_hash(
            hash_invitation_token(plaintext), now
        )

    async def consume(
        self, uow: UnitOfWork, invitation: Invitation, password_hash: str, now: datetime
    ) -> bool:
        """
        Stage the consumed mark and the password replacement together.

        Returns False when another attempt already consumed the invitation
        (or it expired meanwhile); in that case nothing was written.
        """
        if not await uow.invitations.mark_consumed(invitation.id, now):
            return False
        if not await uow.users.update_password(invitation.user_id, password_hash, now):
            raise LookupError(f"Invitation {invitation.id} targets a missing user")
        return True
