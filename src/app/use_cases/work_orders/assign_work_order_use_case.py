"""
Assign Work Order Use Case
"""

import logging
from uuid import UUID

from src.app.services.authorization import AuthorizationEngine, Operation, ResourceKind
from src.app.services.store_timeout import bounded
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import WorkOrderStatus
from src.domain.identity_context import IdentityContext
from src.domain.scope import ScopePredicate
from src.libs.result import Error, Result, Return

from ._assignee import check_assignee
from .dtos import WorkOrderStatusResponse

logger = logging.getLogger(__name__)


class AssignWorkOrderUseCase:
    """
    Business Rules:
    - admin/dispatcher only, inside their provider
    - Assignee must be an active technician of the provider
    - Only open work orders can be (re)assigned
    """

    def __init__(
        self, uow: UnitOfWork, engine: AuthorizationEngine, store_timeout: float = 5.0
    ):
        self.uow = uow
        self.engine = engine
        self.store_timeout = store_timeout

    async def execute(
        self, identity: IdentityContext, work_order_id: UUID, assignee_id: UUID
    ) -> Result[WorkOrderStatusResponse]:
        decision = self.engine.authorize(
            identity, ResourceKind.work_order, Operation.assign
        )
        if decision.is_err():
            return decision

        return await bounded(
            self._assign(identity, decision.value, work_order_id, assignee_id),
            self.store_timeout,
            "assign_work_order",
        )

    async def _assign(
        self,
        identity: IdentityContext,
        scope: ScopePredicate,
        work_order_id: UUID,
        assignee_id: UUID,
    ) -> Result[WorkOrderStatusResponse]:
        async with self.uow:
            work_order = await self.uow.work_orders.get(work_order_id, scope)
            if work_order is None:
                return Return.err(Error("NOT_FOUND", "Work order not found"))

            if work_order.status != WorkOrderStatus.open:
                return Return.err(
                    Error("CONFLICT", f"Cannot assign a {work_order.status.value} work order")
                )

            assignee_check = await check_assignee(
                self.uow, assignee_id, scope.service_provider_id
            )
            if assignee_check.is_err():
                return assignee_check

            assigned = await self.uow.work_orders.assign(
                work_order_id, scope, assignee_id, utc_now()
            )
            if not assigned:
                return Return.err(Error("CONFLICT", "Work order is no longer open"))
            await self.uow.commit()

            logger.info(
                f"Work order {work_order_id} assigned to {assignee_id} by {identity.user_id}"
            )
            return Return.ok(
                WorkOrderStatusResponse(
                    id=str(work_order_id),
                    status=work_order.status.value,
                    assigned_to=str(assignee_id),
                )
            )
