from typing import Optional
from uuid import UUID

from sqlalchemy import and_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.customer_repository import ICustomerRepository
from src.domain.entities import Asset, Customer, Site


class CustomerRepository(ICustomerRepository):
    """Customer repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_in_provider(
        self, customer_id: UUID, service_provider_id: UUID
    ) -> Optional[Customer]:
        stmt = select(Customer).where(
            Customer.id == customer_id,
            Customer.service_provider_id == service_provider_id,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def check_site_asset_ownership(
        self,
        service_provider_id: UUID,
        customer_id: UUID,
        site_id: UUID,
        asset_id: UUID,
    ) -> bool:
        stmt = (
            select(Customer.id)
            .join(Site, and_(Site.id == site_id, Site.customer_id == Customer.id))
            .join(
                Asset,
                and_(
                    Asset.id == asset_id,
                    Asset.customer_id == Customer.id,
                    Asset.site_id == Site.id,
                ),
            )
            .where(
                Customer.id == customer_id,
                Customer.service_provider_id == service_provider_id,
            )
        )
        result = await self.session.exec(stmt)
        return result.first() is not None
