"""
Complete Work Order Use Case
"""

import logging
from typing import Optional
from uuid import UUID

from src.app.services.authorization import AuthorizationEngine, Operation, ResourceKind
from src.app.services.store_timeout import bounded
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import WorkOrderStatus
from src.domain.identity_context import IdentityContext
from src.domain.scope import ScopePredicate
from src.libs.result import Error, Result, Return

from .dtos import WorkOrderStatusResponse

logger = logging.getLogger(__name__)


class CompleteWorkOrderUseCase:
    """
    Business Rules:
    - admin/dispatcher: any work order of their provider
    - technician: only work orders assigned to them
    - client: denied
    - Cancelled work orders are immutable (CONFLICT for every role)
    - Out-of-scope ids look exactly like missing ones (NOT_FOUND)
    - Notes replace the stored notes only when given
    """

    def __init__(
        self, uow: UnitOfWork, engine: AuthorizationEngine, store_timeout: float = 5.0
    ):
        self.uow = uow
        self.engine = engine
        self.store_timeout = store_timeout

    async def execute(
        self, identity: IdentityContext, work_order_id: UUID, notes: Optional[str] = None
    ) -> Result[WorkOrderStatusResponse]:
        decision = self.engine.authorize(
            identity, ResourceKind.work_order, Operation.complete
        )
        if decision.is_err():
            return decision

        return await bounded(
            self._complete(identity, decision.value, work_order_id, notes),
            self.store_timeout,
            "complete_work_order",
        )

    async def _complete(
        self,
        identity: IdentityContext,
        scope: ScopePredicate,
        work_order_id: UUID,
        notes: Optional[str],
    ) -> Result[WorkOrderStatusResponse]:
        async with self.uow:
            work_order = await self.uow.work_orders.get(work_order_id, scope)
            if work_order is None:
                return Return.err(Error("NOT_FOUND", "Work order not found"))

            if work_order.status == WorkOrderStatus.cancelled:
                return Return.err(
                    Error("CONFLICT", "Cancelled work orders cannot be completed")
                )

            completed = await self.uow.work_orders.complete(
                work_order_id, scope, notes, utc_now()
            )
            if not completed:
                # Cancelled between the read and the write
                return Return.err(
                    Error("CONFLICT", "Cancelled work orders cannot be completed")
                )
            await self.uow.commit()

            logger.info(f"Work order {work_order_id} completed by {identity.user_id}")
            return Return.ok(
                WorkOrderStatusResponse(
                    id=str(work_order_id),
                    status=WorkOrderStatus.completed.value,
                    assigned_to=(
                        str(work_order.assigned_to) if work_order.assigned_to else None
                    ),
                )
            )
