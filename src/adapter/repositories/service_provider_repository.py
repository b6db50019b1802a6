from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.service_provider_repository import IServiceProviderRepository
from src.domain.entities import ServiceProvider


class ServiceProviderRepository(IServiceProviderRepository):
    """Service provider repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, service_provider_id: UUID) -> Optional[ServiceProvider]:
        stmt = select(ServiceProvider).where(ServiceProvider.id == service_provider_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()
