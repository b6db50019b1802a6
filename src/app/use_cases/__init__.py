"""
Use Cases

Organized into domain folders:
- auth/: Login
- users/: User provisioning by invitation, activation toggling
- invitations/: Invitation consumption
- work_orders/: Scoped work order operations
- reports/: Monthly report data
"""

from .auth import LoginUseCase
from .users import CreateUserUseCase, ResendInvitationUseCase, SetUserActiveUseCase
from .invitations import AcceptInvitationUseCase
from .work_orders import (
    AssignWorkOrderUseCase,
    CompleteWorkOrderUseCase,
    CreateWorkOrderUseCase,
    ListWorkOrdersUseCase,
)
from .reports import MonthlyReportUseCase

__all__ = [
    # Auth
    "LoginUseCase",
    # Users
    "CreateUserUseCase",
    "ResendInvitationUseCase",
    "SetUserActiveUseCase",
    # Invitations
    "AcceptInvitationUseCase",
    # Work orders
    "AssignWorkOrderUseCase",
    "CompleteWorkOrderUseCase",
    "CreateWorkOrderUseCase",
    "ListWorkOrdersUseCase",
    # Reports
    "MonthlyReportUseCase",
]
