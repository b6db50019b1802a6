"""
Invitation Entity

One-time, time-boxed grant that lets a pending user set a password.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class Invitation(SQLModel, table=True):
    """
    Invitation entity - credential bootstrap for a login-disabled user.

    Business Rules:
    - Created together with the user it targets (or on re-invite)
    - Only the SHA-256 hex digest of the token is stored
    - Usable iff used_at is NULL and now < expires_at
    - Consumed at most once; re-invites add rows, never reuse one
    """

    __tablename__ = "user_invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    service_provider_id: UUID = Field(
        foreign_key="service_providers.id", nullable=False, index=True
    )
    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    created_by: UUID = Field(foreign_key="users.id", nullable=False)

    token_hash: str = Field(unique=True, index=True, max_length=64)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(
        default_factory=datetime.utcnow, sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_invitation_expires_at", "expires_at"),)

    def is_usable(self, now: datetime) -> bool:
        return self.used_at is None and now < self.expires_at
