"""
Identity Context

Verified, request-scoped claim set describing the caller. Only ever built
from a session token whose signature and expiry were checked.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from .entities.enums import UserRole


class IdentityContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: UUID
    service_provider_id: UUID
    role: UserRole
    customer_id: Optional[UUID] = None
    issued_at: datetime
    expires_at: datetime
