"""
User Management Use Cases

Provisioning by invitation and activation toggling.
"""

from .create_user_use_case import CreateUserUseCase
from .resend_invitation_use_case import ResendInvitationUseCase
from .set_user_active_use_case import SetUserActiveUseCase
from .dtos import (
    CreateUserCommand,
    CreateUserResponse,
    ResendInvitationResponse,
    SetUserActiveResponse,
)

__all__ = [
    "CreateUserUseCase",
    "ResendInvitationUseCase",
    "SetUserActiveUseCase",
    "CreateUserCommand",
    "CreateUserResponse",
    "ResendInvitationResponse",
    "SetUserActiveResponse",
]
