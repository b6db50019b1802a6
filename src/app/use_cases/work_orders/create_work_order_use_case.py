"""
Create Work Order Use Case
"""

import logging

from src.app.services.authorization import AuthorizationEngine, Operation, ResourceKind
from src.app.services.store_timeout import bounded
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import WorkOrder, WorkOrderStatus
from src.domain.identity_context import IdentityContext
from src.domain.scope import ScopePredicate
from src.libs.result import Error, Result, Return

from ._assignee import check_assignee
from .dtos import CreateWorkOrderCommand, CreateWorkOrderResponse

logger = logging.getLogger(__name__)


class CreateWorkOrderUseCase:
    """
    Business Rules:
    - admin/dispatcher only, for any customer of their provider
    - customer -> site -> asset must be one ownership chain inside the provider
      (INVALID_OWNERSHIP_CHAIN is a validation error, not a denial)
    - Optional assignee must be an active technician of the provider
    - Starts open, created_by is the caller
    """

    def __init__(
        self, uow: UnitOfWork, engine: AuthorizationEngine, store_timeout: float = 5.0
    ):
        self.uow = uow
        self.engine = engine
        self.store_timeout = store_timeout

    async def execute(
        self, identity: IdentityContext, command: CreateWorkOrderCommand
    ) -> Result[CreateWorkOrderResponse]:
        title = command.title.strip()
        if not title:
            return Return.err(Error("VALIDATION_ERROR", "title is required"))

        decision = self.engine.authorize(
            identity,
            ResourceKind.work_order,
            Operation.create,
            requested_customer_id=command.customer_id,
        )
        if decision.is_err():
            return decision

        return await bounded(
            self._create(identity, decision.value, command, title),
            self.store_timeout,
            "create_work_order",
        )

    async def _create(
        self,
        identity: IdentityContext,
        scope: ScopePredicate,
        command: CreateWorkOrderCommand,
        title: str,
    ) -> Result[CreateWorkOrderResponse]:
        async with self.uow:
            owned = await self.uow.customers.check_site_asset_ownership(
                scope.service_provider_id,
                command.customer_id,
                command.site_id,
                command.asset_id,
            )
            if not owned:
                return Return.err(
                    Error(
                        "INVALID_OWNERSHIP_CHAIN",
                        "Invalid customer/site/asset for this provider",
                    )
                )

            if command.assigned_to is not None:
                assignee_check = await check_assignee(
                    self.uow, command.assigned_to, scope.service_provider_id
                )
                if assignee_check.is_err():
                    return assignee_check

            work_order = WorkOrder(
                service_provider_id=scope.service_provider_id,
                customer_id=command.customer_id,
                site_id=command.site_id,
                asset_id=command.asset_id,
                type=command.type,
                priority=command.priority,
                status=WorkOrderStatus.open,
                title=title,
                description=command.description,
                notes=command.notes,
                created_by=identity.user_id,
                assigned_to=command.assigned_to,
            )
            work_order = await self.uow.work_orders.create(work_order)
            await self.uow.commit()

            logger.info(f"Work order {work_order.id} created by {identity.user_id}")
            return Return.ok(CreateWorkOrderResponse(id=str(work_order.id)))
