"""
Work Order Use Cases

Every operation is scoped by the authorization engine before touching the store.
"""

from .assign_work_order_use_case import AssignWorkOrderUseCase
from .complete_work_order_use_case import CompleteWorkOrderUseCase
from .create_work_order_use_case import CreateWorkOrderUseCase
from .list_work_orders_use_case import ListWorkOrdersUseCase
from .dtos import (
    CreateWorkOrderCommand,
    CreateWorkOrderResponse,
    WorkOrderItem,
    WorkOrderStatusResponse,
)

__all__ = [
    "AssignWorkOrderUseCase",
    "CompleteWorkOrderUseCase",
    "CreateWorkOrderUseCase",
    "ListWorkOrdersUseCase",
    "CreateWorkOrderCommand",
    "CreateWorkOrderResponse",
    "WorkOrderItem",
    "WorkOrderStatusResponse",
]
