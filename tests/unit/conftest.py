from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.domain.entities import UserRole
from src.domain.identity_context import IdentityContext


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_tenant_and_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update_password = AsyncMock(return_value=True)
    uow.users.set_active = AsyncMock(return_value=True)

    uow.invitations = MagicMock()
    uow.invitations.create = AsyncMock(side_effect=lambda invitation: invitation)
    uow.invitations.get_usable_by_token_hash = AsyncMock(return_value=None)
    uow.invitations.mark_consumed = AsyncMock(return_value=True)

    uow.customers = MagicMock()
    uow.customers.get_in_provider = AsyncMock(return_value=None)
    uow.customers.check_site_asset_ownership = AsyncMock(return_value=True)

    uow.service_providers = MagicMock()
    uow.service_providers.get_by_id = AsyncMock(return_value=None)

    uow.work_orders = MagicMock()
    uow.work_orders.list = AsyncMock(return_value=[])
    uow.work_orders.get = AsyncMock(return_value=None)
    uow.work_orders.create = AsyncMock(side_effect=lambda work_order: work_order)
    uow.work_orders.complete = AsyncMock(return_value=True)
    uow.work_orders.assign = AsyncMock(return_value=True)
    uow.work_orders.list_completed_between = AsyncMock(return_value=[])
    return uow


@pytest.fixture
def make_identity():
    """Build an IdentityContext; provider and customer ids are fresh unless given."""

    def _make(role: UserRole, service_provider_id=None, customer_id=None, user_id=None):
        now = datetime.now(UTC).replace(microsecond=0)
        if role == UserRole.client and customer_id is None:
            customer_id = uuid4()
        return IdentityContext(
            user_id=user_id or uuid4(),
            service_provider_id=service_provider_id or uuid4(),
            role=role,
            customer_id=customer_id,
            issued_at=now,
            expires_at=now + timedelta(hours=24),
        )

    return _make
