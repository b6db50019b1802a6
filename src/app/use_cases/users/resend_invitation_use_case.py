"""
Resend Invitation Use Case

Issues a fresh invitation for a user who has not set a password yet.
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from src.app.services.authorization import AuthorizationEngine, Operation, ResourceKind
from src.app.services.invitation_lifecycle import InvitationLifecycle
from src.app.services.invitation_sender import IInvitationSender, InvitationDelivery
from src.app.services.store_timeout import bounded
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import Invitation, User
from src.domain.identity_context import IdentityContext
from src.libs.result import Error, Result, Return

from ._delivery import deliver
from .dtos import ResendInvitationResponse

logger = logging.getLogger(__name__)


@dataclass
class _Reissued:
    user: User
    invitation: Invitation
    token: str


class ResendInvitationUseCase:
    """
    Use case for re-inviting a pending user.

    Business Rules:
    - Same role rule as user creation (caller must be able to create the target's role)
    - A new invitation row with a new token; earlier rows are left untouched
      and stay independently consumable until they expire
    - Users that already set a password cannot be re-invited
    """

    def __init__(
        self,
        uow: UnitOfWork,
        engine: AuthorizationEngine,
        lifecycle: InvitationLifecycle,
        sender: IInvitationSender,
        store_timeout: float = 5.0,
    ):
        self.uow = uow
        self.engine = engine
        self.lifecycle = lifecycle
        self.sender = sender
        self.store_timeout = store_timeout

    async def execute(
        self, identity: IdentityContext, user_id: UUID
    ) -> Result[ResendInvitationResponse]:
        reissued = await bounded(
            self._reissue(identity, user_id), self.store_timeout, "resend_invitation"
        )
        if reissued.is_err():
            return reissued
        result: _Reissued = reissued.value

        invite_sent = await deliver(
            self.sender,
            InvitationDelivery(
                invitation_id=result.invitation.id,
                user_id=result.user.id,
                service_provider_id=result.user.service_provider_id,
                email=result.user.email,
                role=result.user.role.value,
                expires_at=result.invitation.expires_at,
                token=result.token,
            ),
        )

        return Return.ok(
            ResendInvitationResponse(
                invitation_id=str(result.invitation.id),
                invite_sent=invite_sent,
                expires_at=result.invitation.expires_at.isoformat(),
            )
        )

    async def _reissue(self, identity: IdentityContext, user_id: UUID) -> Result[_Reissued]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id, identity.service_provider_id)
            if user is None:
                return Return.err(Error("NOT_FOUND", "User not found"))

            decision = self.engine.authorize(
                identity, ResourceKind.user, Operation.create, target_role=user.role
            )
            if decision.is_err():
                return decision

            if user.has_password:
                return Return.err(
                    Error("ALREADY_ACTIVATED", "User has already set a password")
                )

            token, invitation = await self.lifecycle.issue(
                self.uow, identity, user, utc_now()
            )
            await self.uow.commit()

            logger.info(f"Invitation {invitation.id} re-issued for user {user.id}")
            return Return.ok(_Reissued(user=user, invitation=invitation, token=token))
