from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import Invitation


class IInvitationRepository(ABC):
    """Invitation repository interface - application layer"""

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def get_usable_by_token_hash(
        self, token_hash: str, now: datetime
    ) -> Optional[Invitation]:
        """Get an unconsumed, unexpired invitation of a still-pending user by token hash"""
        pass

    @abstractmethod
    async def mark_consumed(self, invitation_id: UUID, now: datetime) -> bool:
        """
        Atomically mark the invitation consumed.

        Returns True only for the single caller whose conditional update
        matched an unconsumed, unexpired row whose user has not set a
        password yet.
        """
        pass
