"""
Invitation Use Cases

Credential bootstrap for invited users.
"""

from .accept_invitation_use_case import AcceptInvitationUseCase
from .dtos import AcceptInvitationResponse

__all__ = [
    "AcceptInvitationUseCase",
    "AcceptInvitationResponse",
]
