from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.app.services.authorization import AuthorizationEngine
from src.app.services.invitation_lifecycle import InvitationLifecycle
from src.app.services.invitation_sender import InMemoryInvitationOutbox
from src.app.services.invitation_tokens import hash_invitation_token
from src.app.use_cases.users import CreateUserCommand, CreateUserUseCase
from src.domain.entities import UNSET_PASSWORD_HASH, Customer, User, UserRole


@pytest.fixture
def outbox():
    return InMemoryInvitationOutbox()


@pytest.fixture
def use_case(mock_uow, outbox):
    return CreateUserUseCase(mock_uow, AuthorizationEngine(), InvitationLifecycle(), outbox)


@pytest.mark.asyncio
async def test_admin_creates_client(use_case, mock_uow, outbox, make_identity):
    admin = make_identity(UserRole.admin)
    customer = Customer(id=uuid4(), service_provider_id=admin.service_provider_id, name="Acme")
    mock_uow.customers.get_in_provider.return_value = customer

    result = await use_case.execute(
        admin,
        CreateUserCommand(
            fullname=" Carla Client ",
            email="Carla@Example.com",
            role=UserRole.client,
            customer_id=customer.id,
        ),
    )

    assert result.is_ok()
    assert result.value.invite_sent is True

    created: User = mock_uow.users.create.call_args.args[0]
    assert created.fullname == "Carla Client"
    assert created.email == "carla@example.com"
    assert created.service_provider_id == admin.service_provider_id
    assert created.customer_id == customer.id
    assert created.password_hash == UNSET_PASSWORD_HASH
    mock_uow.commit.assert_called_once()

    # The plaintext goes to the outbox only; the row keeps its hash
    delivery = outbox.latest_for("carla@example.com")
    invitation = mock_uow.invitations.create.call_args.args[0]
    assert hash_invitation_token(delivery.token) == invitation.token_hash
    assert delivery.token not in result.value.model_dump_json()


@pytest.mark.asyncio
async def test_dispatcher_creates_technician(use_case, mock_uow, make_identity):
    result = await use_case.execute(
        make_identity(UserRole.dispatcher),
        CreateUserCommand(fullname="Tom", email="tom@example.com", role=UserRole.technician),
    )

    assert result.is_ok()


@pytest.mark.asyncio
@pytest.mark.parametrize("target", [UserRole.admin, UserRole.dispatcher, UserRole.client])
async def test_dispatcher_cannot_create_other_roles(use_case, mock_uow, make_identity, target):
    result = await use_case.execute(
        make_identity(UserRole.dispatcher),
        CreateUserCommand(
            fullname="X",
            email="x@example.com",
            role=target,
            customer_id=uuid4() if target == UserRole.client else None,
        ),
    )

    assert result.is_err()
    assert result.error.code == "DENIED"
    mock_uow.users.create.assert_not_called()


@pytest.mark.asyncio
async def test_admin_cannot_create_admin(use_case, make_identity):
    result = await use_case.execute(
        make_identity(UserRole.admin),
        CreateUserCommand(fullname="Root", email="root@example.com", role=UserRole.admin),
    )

    assert result.error.code == "DENIED"


@pytest.mark.asyncio
async def test_client_requires_customer(use_case, make_identity):
    result = await use_case.execute(
        make_identity(UserRole.admin),
        CreateUserCommand(fullname="C", email="c@example.com", role=UserRole.client),
    )

    assert result.error.code == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_non_client_must_not_have_customer(use_case, make_identity):
    result = await use_case.execute(
        make_identity(UserRole.admin),
        CreateUserCommand(
            fullname="T", email="t@example.com", role=UserRole.technician, customer_id=uuid4()
        ),
    )

    assert result.error.code == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_customer_of_other_provider_is_rejected(use_case, mock_uow, make_identity):
    mock_uow.customers.get_in_provider.return_value = None

    result = await use_case.execute(
        make_identity(UserRole.admin),
        CreateUserCommand(
            fullname="C", email="c@example.com", role=UserRole.client, customer_id=uuid4()
        ),
    )

    assert result.error.code == "INVALID_CUSTOMER"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_duplicate_email(use_case, mock_uow, make_identity):
    admin = make_identity(UserRole.admin)
    mock_uow.users.get_by_tenant_and_email.return_value = User(
        service_provider_id=admin.service_provider_id,
        fullname="Existing",
        email="tom@example.com",
        role=UserRole.technician,
    )

    result = await use_case.execute(
        admin,
        CreateUserCommand(fullname="Tom", email="TOM@example.com", role=UserRole.technician),
    )

    assert result.error.code == "EMAIL_ALREADY_EXISTS"
    mock_uow.users.create.assert_not_called()


@pytest.mark.asyncio
async def test_delivery_failure_keeps_the_user(mock_uow, make_identity):
    sender = AsyncMock()
    sender.send.side_effect = RuntimeError("smtp down")
    use_case = CreateUserUseCase(mock_uow, AuthorizationEngine(), InvitationLifecycle(), sender)

    result = await use_case.execute(
        make_identity(UserRole.admin),
        CreateUserCommand(fullname="Tom", email="tom@example.com", role=UserRole.technician),
    )

    assert result.is_ok()
    assert result.value.invite_sent is False
    mock_uow.commit.assert_called_once()
