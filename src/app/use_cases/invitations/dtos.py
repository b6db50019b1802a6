"""
Invitation Use Case DTOs (Data Transfer Objects)
"""

from pydantic import BaseModel


class AcceptInvitationResponse(BaseModel):
    """Response for accept invitation use case"""

    ok: bool
