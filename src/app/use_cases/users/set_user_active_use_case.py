"""
Set User Active Use Case

Enables or disables login for a user of the caller's provider.
"""

import logging
from uuid import UUID

from src.app.services.authorization import AuthorizationEngine, Operation, ResourceKind
from src.app.services.store_timeout import bounded
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.identity_context import IdentityContext
from src.libs.result import Error, Result, Return

from .dtos import SetUserActiveResponse

logger = logging.getLogger(__name__)


class SetUserActiveUseCase:
    """
    Business Rules:
    - Caller must be able to create the target user's role
    - Only users of the caller's own provider are visible
    """

    def __init__(
        self, uow: UnitOfWork, engine: AuthorizationEngine, store_timeout: float = 5.0
    ):
        self.uow = uow
        self.engine = engine
        self.store_timeout = store_timeout

    async def execute(
        self, identity: IdentityContext, user_id: UUID, is_active: bool
    ) -> Result[SetUserActiveResponse]:
        return await bounded(
            self._execute(identity, user_id, is_active), self.store_timeout, "set_user_active"
        )

    async def _execute(
        self, identity: IdentityContext, user_id: UUID, is_active: bool
    ) -> Result[SetUserActiveResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id, identity.service_provider_id)
            if user is None:
                return Return.err(Error("NOT_FOUND", "User not found"))

            decision = self.engine.authorize(
                identity, ResourceKind.user, Operation.set_active, target_role=user.role
            )
            if decision.is_err():
                return decision

            updated = await self.uow.users.set_active(
                user.id, decision.value.service_provider_id, is_active, utc_now()
            )
            if not updated:
                return Return.err(Error("NOT_FOUND", "User not found"))
            await self.uow.commit()

            logger.info(f"User {user.id} is_active={is_active} set by {identity.user_id}")
            return Return.ok(SetUserActiveResponse(id=str(user.id), is_active=is_active))
