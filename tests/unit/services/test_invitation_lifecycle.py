from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from src.app.services.invitation_lifecycle import InvitationLifecycle
from src.app.services.invitation_tokens import hash_invitation_token
from src.domain.entities import Invitation, User, UserRole


@pytest.mark.asyncio
async def test_issue_stores_only_the_hash(mock_uow, make_identity):
    lifecycle = InvitationLifecycle(ttl=timedelta(hours=48))
    issuer = make_identity(UserRole.admin)
    user = User(
        id=uuid4(),
        service_provider_id=issuer.service_provider_id,
        fullname="Tech",
        email="tech@example.com",
        role=UserRole.technician,
    )
    now = datetime(2025, 1, 1, 12, 0, 0)

    plaintext, invitation = await lifecycle.issue(mock_uow, issuer, user, now)

    assert len(plaintext) >= 43
    assert invitation.token_hash == hash_invitation_token(plaintext)
    assert invitation.token_hash != plaintext
    assert invitation.expires_at == now + timedelta(hours=48)
    assert invitation.user_id == user.id
    assert invitation.created_by == issuer.user_id
    assert invitation.used_at is None


@pytest.mark.asyncio
async def test_tokens_are_unique(mock_uow, make_identity):
    lifecycle = InvitationLifecycle()
    issuer = make_identity(UserRole.admin)
    user = User(
        id=uuid4(),
        service_provider_id=issuer.service_provider_id,
        fullname="Tech",
        email="tech@example.com",
        role=UserRole.technician,
    )

    first, _ = await lifecycle.issue(mock_uow, issuer, user, datetime.utcnow())
    second, _ = await lifecycle.issue(mock_uow, issuer, user, datetime.utcnow())

    assert first != second


@pytest.mark.asyncio
async def test_consume_skips_password_when_gate_fails(mock_uow):
    mock_uow.invitations.mark_consumed.return_value = False
    invitation = Invitation(
        id=uuid4(),
        service_provider_id=uuid4(),
        user_id=uuid4(),
        created_by=uuid4(),
        token_hash="x" * 64,
        expires_at=datetime.utcnow() + timedelta(hours=1),
    )

    consumed = await InvitationLifecycle().consume(
        mock_uow, invitation, "$2b$hash", datetime.utcnow()
    )

    assert consumed is False
    mock_uow.users.update_password.assert_not_called()


@pytest.mark.asyncio
async def test_consume_with_missing_user_raises(mock_uow):
    mock_uow.users.update_password.return_value = False
    invitation = Invitation(
        id=uuid4(),
        service_provider_id=uuid4(),
        user_id=uuid4(),
        created_by=uuid4(),
        token_hash="x" * 64,
        expires_at=datetime.utcnow() + timedelta(hours=1),
    )

    with pytest.raises(LookupError):
        await InvitationLifecycle().consume(mock_uow, invitation, "$2b$hash", datetime.utcnow())
