"""
User Use Case DTOs (Data Transfer Objects)

Commands and responses for user provisioning.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import UserRole


# ============================================================================
# Command DTOs
# ============================================================================


class CreateUserCommand(BaseModel):
    """Attributes of the identity to provision"""

    fullname: str
    email: str
    role: UserRole
    phone_number: Optional[str] = None
    customer_id: Optional[UUID] = None


# ============================================================================
# Response DTOs
# ============================================================================


class CreateUserResponse(BaseModel):
    """Response for create user use case"""

    id: str
    invitation_id: str
    invite_sent: bool
    expires_at: str


class ResendInvitationResponse(BaseModel):
    """Response for resend invitation use case"""

    invitation_id: str
    invite_sent: bool
    expires_at: str


class SetUserActiveResponse(BaseModel):
    """Response for activation toggling"""

    id: str
    is_active: bool
