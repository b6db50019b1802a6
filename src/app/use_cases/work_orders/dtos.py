"""
Work Order Use Case DTOs (Data Transfer Objects)
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import WorkOrder, WorkOrderPriority, WorkOrderType


# ============================================================================
# Command DTOs
# ============================================================================


class CreateWorkOrderCommand(BaseModel):
    customer_id: UUID
    site_id: UUID
    asset_id: UUID
    title: str
    type: WorkOrderType = WorkOrderType.corrective
    priority: WorkOrderPriority = WorkOrderPriority.medium
    description: Optional[str] = None
    notes: Optional[str] = None
    assigned_to: Optional[UUID] = None


# ============================================================================
# Response DTOs
# ============================================================================


class WorkOrderItem(BaseModel):
    id: str
    customer_id: str
    site_id: str
    asset_id: str
    type: str
    priority: str
    status: str
    title: str
    assigned_to: Optional[str] = None
    created_by: str
    completed_at: Optional[str] = None
    created_at: str

    @classmethod
    def from_entity(cls, work_order: WorkOrder) -> "WorkOrderItem":
        return cls(
            id=str(work_order.id),
            customer_id=str(work_order.customer_id),
            site_id=str(work_order.site_id),
            asset_id=str(work_order.asset_id),
            type=work_order.type.value,
            priority=work_order.priority.value,
            status=work_order.status.value,
            title=work_order.title,
            assigned_to=str(work_order.assigned_to) if work_order.assigned_to else None,
            created_by=str(work_order.created_by),
            completed_at=(
                work_order.completed_at.isoformat() if work_order.completed_at else None
            ),
            created_at=work_order.created_at.isoformat(),
        )


class CreateWorkOrderResponse(BaseModel):
    id: str


class WorkOrderStatusResponse(BaseModel):
    id: str
    status: str
    assigned_to: Optional[str] = None
