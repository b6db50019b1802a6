"""
List Work Orders Use Case
"""

from typing import List, Optional
from uuid import UUID

from src.app.services.authorization import AuthorizationEngine, Operation, ResourceKind
from src.app.services.store_timeout import bounded
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import WorkOrderStatus
from src.domain.identity_context import IdentityContext
from src.domain.scope import ScopePredicate
from src.libs.result import Result, Return

from .dtos import WorkOrderItem

DEFAULT_LIMIT = 50
MAX_LIMIT = 200


class ListWorkOrdersUseCase:
    """
    Business Rules:
    - admin/dispatcher: whole provider, optional customer filter
    - technician: only work orders assigned to them, customer filter ignored
    - client: only their own customer, from the token
    - Newest first
    """

    def __init__(
        self, uow: UnitOfWork, engine: AuthorizationEngine, store_timeout: float = 5.0
    ):
        self.uow = uow
        self.engine = engine
        self.store_timeout = store_timeout

    async def execute(
        self,
        identity: IdentityContext,
        customer_id: Optional[UUID] = None,
        status: Optional[WorkOrderStatus] = None,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
    ) -> Result[List[WorkOrderItem]]:
        decision = self.engine.authorize(
            identity,
            ResourceKind.work_order,
            Operation.read,
            requested_customer_id=customer_id,
        )
        if decision.is_err():
            return decision

        limit = max(1, min(limit, MAX_LIMIT))
        offset = max(0, offset)

        return await bounded(
            self._list(decision.value, status, limit, offset),
            self.store_timeout,
            "list_work_orders",
        )

    async def _list(
        self,
        scope: ScopePredicate,
        status: Optional[WorkOrderStatus],
        limit: int,
        offset: int,
    ) -> Result[List[WorkOrderItem]]:
        async with self.uow:
            work_orders = await self.uow.work_orders.list(scope, status, limit, offset)
            return Return.ok([WorkOrderItem.from_entity(wo) for wo in work_orders])
