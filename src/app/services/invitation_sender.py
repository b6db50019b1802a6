"""
Invitation delivery side channel

Receives the plaintext token exactly once, right after the invitation row is
committed. Email delivery is an external collaborator; the in-process outbox
is what runs when nothing else is wired in.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class InvitationDelivery(BaseModel):
    model_config = ConfigDict(frozen=True)

    invitation_id: UUID
    user_id: UUID
    service_provider_id: UUID
    email: str
    role: str
    expires_at: datetime
    token: str


class IInvitationSender(ABC):
    @abstractmethod
    async def send(self, delivery: InvitationDelivery) -> None:
        """Hand the invitation to the delivery channel"""
        pass


class InMemoryInvitationOutbox(IInvitationSender):
    """Keeps deliveries in memory. Only non-secret metadata is logged."""

    def __init__(self):
        self.deliveries: List[InvitationDelivery] = []

    async def send(self, delivery: InvitationDelivery) -> None:
        self.deliveries.append(delivery)
        logger.info(
            f"Invitation queued: invitation={delivery.invitation_id} "
            f"user={delivery.user_id} role={delivery.role} "
            f"expires={delivery.expires_at.isoformat()}"
        )

    def latest_for(self, email: str) -> Optional[InvitationDelivery]:
        for delivery in reversed(self.deliveries):
            if delivery.email == email:
                return delivery
        return None
