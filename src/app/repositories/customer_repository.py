from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Customer


class ICustomerRepository(ABC):
    """Customer repository interface - application layer"""

    @abstractmethod
    async def get_in_provider(
        self, customer_id: UUID, service_provider_id: UUID
    ) -> Optional[Customer]:
        """Get customer if it belongs to the provider"""
        pass

    @abstractmethod
    async def check_site_asset_ownership(
        self,
        service_provider_id: UUID,
        customer_id: UUID,
        site_id: UUID,
        asset_id: UUID,
    ) -> bool:
        """True iff customer -> site -> asset is one chain inside the provider"""
        pass
