"""
Service Provider Entity

Top-level tenant. No data or identity crosses this boundary.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel


class ServiceProvider(SQLModel, table=True):
    __tablename__ = "service_providers"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
