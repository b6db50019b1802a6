"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from typing import Optional
from pydantic import BaseModel


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """Identity details returned on login"""

    id: str
    service_provider_id: str
    customer_id: Optional[str] = None
    fullname: str
    email: str
    role: str


class LoginResponse(BaseModel):
    """Response for user login use case"""

    access_token: str
    token_type: str = "bearer"
    expires_at: str
    user: UserInfo
