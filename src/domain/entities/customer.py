"""
Customer, Site and Asset Entities

A customer is a sub-scope of a service provider. Sites belong to a customer
and assets sit on a site of that same customer.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel


class Customer(SQLModel, table=True):
    __tablename__ = "customers"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    service_provider_id: UUID = Field(
        foreign_key="service_providers.id", nullable=False, index=True
    )
    name: str = Field(max_length=255)

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )


class Site(SQLModel, table=True):
    __tablename__ = "sites"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    customer_id: UUID = Field(foreign_key="customers.id", nullable=False, index=True)
    name: str = Field(max_length=255)
    address: Optional[str] = Field(default=None, max_length=500)


class Asset(SQLModel, table=True):
    __tablename__ = "assets"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    customer_id: UUID = Field(foreign_key="customers.id", nullable=False, index=True)
    site_id: UUID = Field(foreign_key="sites.id", nullable=False, index=True)
    tag_code: str = Field(max_length=100)
    name: Optional[str] = Field(default=None, max_length=255)
