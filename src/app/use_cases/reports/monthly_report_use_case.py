"""
Monthly Report Use Case

Completed work orders of one customer inside one calendar month.
"""

from datetime import datetime
from typing import Optional, Tuple
from uuid import UUID

from src.app.services.authorization import AuthorizationEngine, Operation, ResourceKind
from src.app.services.store_timeout import bounded
from src.app.services.unit_of_work import UnitOfWork
from src.domain.identity_context import IdentityContext
from src.domain.scope import ScopePredicate
from src.libs.result import Error, Result, Return

from .dtos import MonthlyReportResponse, MonthlyReportRow


def month_window(month: str) -> Optional[Tuple[datetime, datetime]]:
    """'YYYY-MM' -> [first day, first day of next month), or None if malformed."""
    try:
        start = datetime.strptime(month.strip(), "%Y-%m")
    except ValueError:
        return None
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


class MonthlyReportUseCase:
    """
    Business Rules:
    - admin/dispatcher must name a customer of their provider
    - client always gets their own customer, from the token
    - technician: denied
    - Window is [month start, next month start), ordered by completion time
    """

    def __init__(
        self, uow: UnitOfWork, engine: AuthorizationEngine, store_timeout: float = 5.0
    ):
        self.uow = uow
        self.engine = engine
        self.store_timeout = store_timeout

    async def execute(
        self, identity: IdentityContext, month: str, customer_id: Optional[UUID] = None
    ) -> Result[MonthlyReportResponse]:
        window = month_window(month or "")
        if window is None:
            return Return.err(
                Error("VALIDATION_ERROR", "month is required (YYYY-MM)")
            )

        decision = self.engine.authorize(
            identity, ResourceKind.report, Operation.read, requested_customer_id=customer_id
        )
        if decision.is_err():
            return decision

        return await bounded(
            self._build(decision.value, month.strip(), *window),
            self.store_timeout,
            "monthly_report",
        )

    async def _build(
        self, scope: ScopePredicate, month: str, start: datetime, end: datetime
    ) -> Result[MonthlyReportResponse]:
        async with self.uow:
            provider = await self.uow.service_providers.get_by_id(scope.service_provider_id)
            customer = await self.uow.customers.get_in_provider(
                scope.customer_id, scope.service_provider_id
            )
            if provider is None or customer is None:
                return Return.err(Error("NOT_FOUND", "Provider/customer not found"))

            rows = await self.uow.work_orders.list_completed_between(scope, start, end)

            return Return.ok(
                MonthlyReportResponse(
                    service_provider_name=provider.name,
                    customer_id=str(customer.id),
                    customer_name=customer.name,
                    month=month,
                    total=len(rows),
                    rows=[
                        MonthlyReportRow(
                            completed_at=work_order.completed_at.isoformat(),
                            work_order_id=str(work_order.id),
                            site_name=site_name,
                            asset_tag=asset_tag,
                            asset_name=asset_name,
                            type=work_order.type.value,
                            priority=work_order.priority.value,
                            title=work_order.title,
                        )
                        for work_order, site_name, asset_tag, asset_name in rows
                    ],
                )
            )
