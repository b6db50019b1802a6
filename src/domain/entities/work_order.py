"""
Work Order Entity

A unit of field work on one asset of one customer.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import WorkOrderPriority, WorkOrderStatus, WorkOrderType


class WorkOrder(SQLModel, table=True):
    """
    Work order entity.

    Business Rules:
    - customer/site/asset form one ownership chain inside service_provider_id
    - Cancelled work orders are immutable
    - assigned_to, when set, is a technician of the same provider
    """

    __tablename__ = "work_orders"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    service_provider_id: UUID = Field(
        foreign_key="service_providers.id", nullable=False, index=True
    )
    customer_id: UUID = Field(foreign_key="customers.id", nullable=False, index=True)
    site_id: UUID = Field(foreign_key="sites.id", nullable=False)
    asset_id: UUID = Field(foreign_key="assets.id", nullable=False)

    type: WorkOrderType = Field(default=WorkOrderType.corrective)
    priority: WorkOrderPriority = Field(default=WorkOrderPriority.medium)
    status: WorkOrderStatus = Field(default=WorkOrderStatus.open)

    title: str = Field(max_length=255)
    description: Optional[str] = None
    notes: Optional[str] = None

    created_by: UUID = Field(foreign_key="users.id", nullable=False)
    assigned_to: Optional[UUID] = Field(default=None, foreign_key="users.id", index=True)

    # Timestamps
    completed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_work_order_status", "status"),
        Index("idx_work_order_completed_at", "completed_at"),
    )
