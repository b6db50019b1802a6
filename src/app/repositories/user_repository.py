from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_tenant_and_email(
        self, service_provider_id: UUID, email: str
    ) -> Optional[User]:
        """Get user by provider and normalized email"""
        pass

    @abstractmethod
    async def get_by_id(
        self, user_id: UUID, service_provider_id: UUID
    ) -> Optional[User]:
        """Get user by ID inside one provider"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update_password(
        self, user_id: UUID, password_hash: str, now: datetime
    ) -> bool:
        """Replace the password hash; False if the user does not exist"""
        pass

    @abstractmethod
    async def set_active(
        self, user_id: UUID, service_provider_id: UUID, is_active: bool, now: datetime
    ) -> bool:
        """Toggle is_active; False if no such user in the provider"""
        pass
