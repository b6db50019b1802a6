"""
Field Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Role of an identity inside its service provider"""

    admin = "admin"
    dispatcher = "dispatcher"
    technician = "technician"
    client = "client"


class WorkOrderType(str, Enum):
    """Kind of maintenance visit"""

    preventive = "preventive"
    corrective = "corrective"
    inspection = "inspection"


class WorkOrderPriority(str, Enum):
    """Work order urgency"""

    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"


class WorkOrderStatus(str, Enum):
    """Work order lifecycle state"""

    open = "open"
    completed = "completed"
    cancelled = "cancelled"
