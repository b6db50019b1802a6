from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import ServiceProvider


class IServiceProviderRepository(ABC):
    """Service provider repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, service_provider_id: UUID) -> Optional[ServiceProvider]:
        """Get service provider by ID"""
        pass
