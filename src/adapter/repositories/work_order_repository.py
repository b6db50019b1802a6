from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.work_order_repository import IWorkOrderRepository
from src.domain.entities import Asset, Site, WorkOrder, WorkOrderStatus
from src.domain.scope import ScopePredicate


def apply_scope(stmt, scope: ScopePredicate):
    """Restrict a work_orders SELECT or UPDATE to the predicate."""
    stmt = stmt.where(WorkOrder.service_provider_id == scope.service_provider_id)
    if scope.customer_id is not None:
        stmt = stmt.where(WorkOrder.customer_id == scope.customer_id)
    if scope.assigned_to is not None:
        stmt = stmt.where(WorkOrder.assigned_to == scope.assigned_to)
    return stmt


class WorkOrderRepository(IWorkOrderRepository):
    """Work order repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list(
        self,
        scope: ScopePredicate,
        status: Optional[WorkOrderStatus],
        limit: int,
        offset: int,
    ) -> List[WorkOrder]:
        stmt = apply_scope(select(WorkOrder), scope)
        if status is not None:
            stmt = stmt.where(WorkOrder.status == status)
        stmt = stmt.order_by(WorkOrder.created_at.desc()).limit(limit).offset(offset)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get(self, work_order_id: UUID, scope: ScopePredicate) -> Optional[WorkOrder]:
        stmt = apply_scope(select(WorkOrder).where(WorkOrder.id == work_order_id), scope)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, work_order: WorkOrder) -> WorkOrder:
        self.session.add(work_order)
        await self.session.flush()
        await self.session.refresh(work_order)
        return work_order

    async def complete(
        self,
        work_order_id: UUID,
        scope: ScopePredicate,
        notes: Optional[str],
        now: datetime,
    ) -> bool:
        values = {
            "status": WorkOrderStatus.completed,
            "completed_at": now,
            "updated_at": now,
        }
        if notes is not None:
            values["notes"] = notes
        stmt = apply_scope(
            update(WorkOrder).where(
                WorkOrder.id == work_order_id,
                WorkOrder.status != WorkOrderStatus.cancelled,
            ),
            scope,
        )
        result = await self.session.exec(
            stmt.values(**values).execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def assign(
        self,
        work_order_id: UUID,
        scope: ScopePredicate,
        assignee_id: UUID,
        now: datetime,
    ) -> bool:
        stmt = apply_scope(
            update(WorkOrder).where(
                WorkOrder.id == work_order_id,
                WorkOrder.status == WorkOrderStatus.open,
            ),
            scope,
        )
        result = await self.session.exec(
            stmt.values(assigned_to=assignee_id, updated_at=now).execution_options(
                synchronize_session=False
            )
        )
        return result.rowcount == 1

    async def list_completed_between(
        self, scope: ScopePredicate, start: datetime, end: datetime
    ) -> List[Tuple[WorkOrder, str, str, Optional[str]]]:
        stmt = (
            select(WorkOrder, Site.name, Asset.tag_code, Asset.name)
            .join(Site, Site.id == WorkOrder.site_id)
            .join(Asset, Asset.id == WorkOrder.asset_id)
            .where(
                WorkOrder.status == WorkOrderStatus.completed,
                WorkOrder.completed_at >= start,
                WorkOrder.completed_at < end,
            )
        )
        stmt = apply_scope(stmt, scope).order_by(WorkOrder.completed_at.asc())
        result = await self.session.exec(stmt)
        return [tuple(row) for row in result.all()]
