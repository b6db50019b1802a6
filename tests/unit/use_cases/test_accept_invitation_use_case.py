from datetime import datetime, timedelta
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from src.app.services.invitation_lifecycle import InvitationLifecycle
from src.app.services.invitation_tokens import hash_invitation_token
from src.app.services.password_hasher import PasswordHasher
from src.app.use_cases.invitations import AcceptInvitationUseCase
from src.domain.entities import Invitation


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def invitation():
    return Invitation(
        id=uuid4(),
        service_provider_id=uuid4(),
        user_id=uuid4(),
        created_by=uuid4(),
        token_hash=hash_invitation_token("plain-token"),
        expires_at=datetime.utcnow() + timedelta(hours=48),
    )


@pytest.mark.asyncio
async def test_successful_acceptance(mock_uow, hasher, invitation):
    mock_uow.invitations.get_usable_by_token_hash.return_value = invitation

    use_case = AcceptInvitationUseCase(mock_uow, hasher, InvitationLifecycle())
    result = await use_case.execute(" plain-token ", "longenough1")

    assert result.is_ok()
    assert result.value.ok is True

    lookup_hash = mock_uow.invitations.get_usable_by_token_hash.call_args.args[0]
    assert lookup_hash == invitation.token_hash

    mock_uow.invitations.mark_consumed.assert_called_once()
    user_id, password_hash, _ = mock_uow.users.update_password.call_args.args
    assert user_id == invitation.user_id
    assert hasher.verify("longenough1", password_hash)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_unknown_token(mock_uow, hasher):
    result = await AcceptInvitationUseCase(mock_uow, hasher, InvitationLifecycle()).execute(
        "nope", "longenough1"
    )

    assert result.error.code == "INVALID_OR_EXPIRED_TOKEN"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_blank_token_skips_the_store(mock_uow, hasher):
    result = await AcceptInvitationUseCase(mock_uow, hasher, InvitationLifecycle()).execute(
        "   ", "longenough1"
    )

    assert result.error.code == "INVALID_OR_EXPIRED_TOKEN"
    mock_uow.invitations.get_usable_by_token_hash.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("password", ["", "short", "1234567", "é" * 37])
async def test_weak_password_leaves_invitation_usable(mock_uow, hasher, invitation, password):
    mock_uow.invitations.get_usable_by_token_hash.return_value = invitation

    result = await AcceptInvitationUseCase(mock_uow, hasher, InvitationLifecycle()).execute(
        "plain-token", password
    )

    assert result.error.code == "WEAK_PASSWORD"
    mock_uow.invitations.mark_consumed.assert_not_called()
    mock_uow.users.update_password.assert_not_called()


@pytest.mark.asyncio
async def test_configured_minimum_length(mock_uow, hasher, invitation):
    mock_uow.invitations.get_usable_by_token_hash.return_value = invitation

    result = await AcceptInvitationUseCase(
        mock_uow, hasher, InvitationLifecycle(), min_password_length=12
    ).execute("plain-token", "elevenchars")

    assert result.error.code == "WEAK_PASSWORD"


@pytest.mark.asyncio
async def test_lost_race_is_invalid_token(mock_uow, hasher, invitation):
    """Another request consumed the invitation between lookup and update"""
    mock_uow.invitations.get_usable_by_token_hash.return_value = invitation
    mock_uow.invitations.mark_consumed.return_value = False

    result = await AcceptInvitationUseCase(mock_uow, hasher, InvitationLifecycle()).execute(
        "plain-token", "longenough1"
    )

    assert result.error.code == "INVALID_OR_EXPIRED_TOKEN"
    mock_uow.users.update_password.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_missing_user_does_not_commit(mock_uow, hasher, invitation):
    mock_uow.invitations.get_usable_by_token_hash.return_value = invitation
    mock_uow.users.update_password.return_value = False

    result = await AcceptInvitationUseCase(mock_uow, hasher, InvitationLifecycle()).execute(
        "plain-token", "longenough1"
    )

    assert result.error.code == "INVITATION_TARGET_MISSING"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_hashing_happens_before_the_transaction(mock_uow, invitation):
    mock_uow.invitations.get_usable_by_token_hash.return_value = invitation
    hasher = MagicMock(spec=PasswordHasher)
    hasher.hash.return_value = "$2b$04$hash"

    result = await AcceptInvitationUseCase(mock_uow, hasher, InvitationLifecycle()).execute(
        "plain-token", "longenough1"
    )

    assert result.is_ok()
    hasher.hash.assert_called_once_with("longenough1")
