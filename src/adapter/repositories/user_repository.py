from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_tenant_and_email(
        self, service_provider_id: UUID, email: str
    ) -> Optional[User]:
        """Get user by provider and normalized email"""
        stmt = select(User).where(
            User.service_provider_id == service_provider_id, User.email == email
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(
        self, user_id: UUID, service_provider_id: UUID
    ) -> Optional[User]:
        """Get user by ID inside one provider"""
        stmt = select(User).where(
            User.id == user_id, User.service_provider_id == service_provider_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update_password(
        self, user_id: UUID, password_hash: str, now: datetime
    ) -> bool:
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(password_hash=password_hash, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.exec(stmt)
        return result.rowcount == 1

    async def set_active(
        self, user_id: UUID, service_provider_id: UUID, is_active: bool, now: datetime
    ) -> bool:
        stmt = (
            update(User)
            .where(User.id == user_id, User.service_provider_id == service_provider_id)
            .values(is_active=is_active, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.exec(stmt)
        return result.rowcount == 1
