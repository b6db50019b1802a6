from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.invitation_repository import IInvitationRepository
from src.domain.entities import UNSET_PASSWORD_HASH, Invitation, User


def _pending_user_ids():
    return select(User.id).where(User.password_hash == UNSET_PASSWORD_HASH)


class InvitationRepository(IInvitationRepository):
    """Invitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def get_usable_by_token_hash(
        self, token_hash: str, now: datetime
    ) -> Optional[Invitation]:
        stmt = select(Invitation).where(
            Invitation.token_hash == token_hash,
            Invitation.used_at.is_(None),
            Invitation.expires_at > now,
            Invitation.user_id.in_(_pending_user_ids()),
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def mark_consumed(self, invitation_id: UUID, now: datetime) -> bool:
        # The WHERE clause is the consumption gate: a concurrent second
        # attempt re-evaluates it after the first commits and matches nothing.
        # Once the user has a password, older invitations match nothing either.
        stmt = (
            update(Invitation)
            .where(
                Invitation.id == invitation_id,
                Invitation.used_at.is_(None),
                Invitation.expires_at > now,
                Invitation.user_id.in_(_pending_user_ids()),
            )
            .values(used_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.exec(stmt)
        return result.rowcount == 1
