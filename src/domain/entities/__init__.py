"""
Field Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    UserRole,
    WorkOrderPriority,
    WorkOrderStatus,
    WorkOrderType,
)

# Export all entities
from .service_provider import ServiceProvider
from .customer import Asset, Customer, Site
from .user import UNSET_PASSWORD_HASH, User
from .invitation import Invitation
from .work_order import WorkOrder

__all__ = [
    # Enums
    "UserRole",
    "WorkOrderPriority",
    "WorkOrderStatus",
    "WorkOrderType",
    # Entities
    "ServiceProvider",
    "Customer",
    "Site",
    "Asset",
    "User",
    "Invitation",
    "WorkOrder",
    # Constants
    "UNSET_PASSWORD_HASH",
]
