"""
Create User Use Case

Provisions a login-disabled identity and issues its first invitation.
"""

import logging
from dataclasses import dataclass

from src.app.services.authorization import AuthorizationEngine, Operation, ResourceKind
from src.app.services.invitation_lifecycle import InvitationLifecycle
from src.app.services.invitation_sender import IInvitationSender, InvitationDelivery
from src.app.services.store_timeout import bounded
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import Invitation, User, UserRole
from src.domain.identity_context import IdentityContext
from src.libs.result import Error, Result, Return

from ._delivery import deliver
from .dtos import CreateUserCommand, CreateUserResponse

logger = logging.getLogger(__name__)


@dataclass
class _Provisioned:
    user: User
    invitation: Invitation
    token: str


class CreateUserUseCase:
    """
    Use case for creating users by invitation.

    Business Rules:
    - admin may create dispatcher/technician/client, dispatcher only technician
    - client users must name a customer of the caller's provider; other roles must not
    - Email unique per provider
    - User is created with the unset password sentinel (cannot log in)
    - Invitation token: 256 random bits, stored hashed, expires after 48h
    - User and invitation are committed together; the plaintext token is
      handed to the delivery channel once and never stored or logged
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
        self, identity: IdentityContext, command: CreateUserCommand
    ) -> Result[CreateUserResponse]:
        """
        Execute create user use case.

        Args:
            identity: Verified caller
            command: Attributes of the new user

        Returns:
            Result with CreateUserResponse, or Error
        """
        fullname = command.fullname.strip()
        email = command.email.strip().lower()
        phone_number = command.phone_number.strip() if command.phone_number else None

        if not fullname or not email:
            return Return.err(Error("VALIDATION_ERROR", "fullname and email are required"))

        decision = self.engine.authorize(
            identity, ResourceKind.user, Operation.create, target_role=command.role
        )
        if decision.is_err():
            return decision

        if command.role == UserRole.client and command.customer_id is None:
            return Return.err(
                Error("VALIDATION_ERROR", "customer_id is required for client users")
            )
        if command.role != UserRole.client and command.customer_id is not None:
            return Return.err(
                Error("VALIDATION_ERROR", "customer_id is only allowed for client users")
            )

        user = User(
            service_provider_id=identity.service_provider_id,
            customer_id=command.customer_id,
            fullname=fullname,
            email=email,
            phone_number=phone_number or None,
            role=command.role,
        )

        provisioned = await bounded(
            self._provision(identity, user), self.store_timeout, "create_user"
        )
        if provisioned.is_err():
            return provisioned
        result: _Provisioned = provisioned.value

        logger.info(
            f"User {result.user.id} ({result.user.role.value}) created by {identity.user_id}"
        )

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
            CreateUserResponse(
                id=str(result.user.id),
                invitation_id=str(result.invitation.id),
                invite_sent=invite_sent,
                expires_at=result.invitation.expires_at.isoformat(),
            )
        )

    async def _provision(self, identity: IdentityContext, user: User) -> Result[_Provisioned]:
        async with self.uow:
            if user.customer_id is not None:
                customer = await self.uow.customers.get_in_provider(
                    user.customer_id, identity.service_provider_id
                )
                if customer is None:
                    return Return.err(
                        Error("INVALID_CUSTOMER", "Invalid customer_id for this provider")
                    )

            existing = await self.uow.users.get_by_tenant_and_email(
                identity.service_provider_id, user.email
            )
            if existing is not None:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "A user with this email already exists")
                )

            user = await self.uow.users.create(user)
            token, invitation = await self.lifecycle.issue(
                self.uow, identity, user, utc_now()
            )

            await self.uow.commit()

            return Return.ok(_Provisioned(user=user, invitation=invitation, token=token))
