import logging

from src.app.services.invitation_sender import IInvitationSender, InvitationDelivery

logger = logging.getLogger(__name__)


async def deliver(sender: IInvitationSender, delivery: InvitationDelivery) -> bool:
    """
    Hand a committed invitation to the side channel.

    The rows are already committed, so a delivery failure is reported to the
    caller (invite_sent=False) who can re-invite; it does not undo the user.
    """
    try:
        await sender.send(delivery)
    except Exception:
        logger.exception(f"Invitation delivery failed for invitation {delivery.invitation_id}")
        return False
    return True
