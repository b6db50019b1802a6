"""
User Entity

Represents a login-capable (or pending) identity inside one service provider.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel, UniqueConstraint

from .enums import UserRole

# Stored instead of a bcrypt hash until an invitation is consumed.
# It is not a valid bcrypt string, so no submitted password can ever verify.
UNSET_PASSWORD_HASH = "!INVITED_USER_NO_PASSWORD!"


class User(SQLModel, table=True):
    """
    User entity - an identity scoped to a single service provider.

    Business Rules:
    - Email is unique per service provider, stored lower-cased
    - customer_id is set iff role == client, and the customer belongs
      to the same service provider
    - password_hash is UNSET_PASSWORD_HASH until the invitation is consumed
    - Never hard-deleted; deactivated through is_active
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    service_provider_id: UUID = Field(
        foreign_key="service_providers.id", nullable=False, index=True
    )
    customer_id: Optional[UUID] = Field(default=None, foreign_key="customers.id")

    fullname: str = Field(max_length=255)
    email: str = Field(max_length=255, index=True)
    phone_number: Optional[str] = Field(default=None, max_length=50)

    role: UserRole = Field(nullable=False)
    is_active: bool = Field(default=True)
    password_hash: str = Field(default=UNSET_PASSWORD_HASH, max_length=60)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        UniqueConstraint("service_provider_id", "email", name="uq_user_provider_email"),
    )

    @property
    def has_password(self) -> bool:
        return self.password_hash != UNSET_PASSWORD_HASH
