from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_error
from src.app.services.authorization import AuthorizationEngine
from src.app.services.invitation_lifecycle import InvitationLifecycle
from src.app.services.invitation_sender import IInvitationSender
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users import (
    CreateUserCommand,
    CreateUserResponse,
    CreateUserUseCase,
    ResendInvitationResponse,
    ResendInvitationUseCase,
    SetUserActiveResponse,
    SetUserActiveUseCase,
)
from src.depends import (
    get_authorization_engine,
    get_config,
    get_identity_context,
    get_invitation_lifecycle,
    get_invitation_sender,
    get_unit_of_work,
)
from src.domain.entities import UserRole
from src.domain.identity_context import IdentityContext

router = APIRouter(tags=["User"])


@router.get("/me", status_code=status.HTTP_200_OK, response_model=IdentityContext)
async def get_me(identity: IdentityContext = Depends(get_identity_context)):
    """
    Current identity as carried by the session token.

    Raises:
        - 401 Unauthorized: UNAUTHENTICATED, INVALID_TOKEN
    """
    return identity


class CreateUserRequest(BaseModel):
    """Create user HTTP request payload"""

    fullname: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    role: UserRole
    phone_number: Optional[str] = Field(None, max_length=50)
    customer_id: Optional[UUID] = Field(None, description="Required for client users")


@router.post(
    "/users", status_code=status.HTTP_201_CREATED, response_model=CreateUserResponse
)
async def create_user(
    request: CreateUserRequest,
    identity: IdentityContext = Depends(get_identity_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    engine: AuthorizationEngine = Depends(get_authorization_engine),
    lifecycle: InvitationLifecycle = Depends(get_invitation_lifecycle),
    sender: IInvitationSender = Depends(get_invitation_sender),
    config=Depends(get_config),
):
    """
    Create User by Invitation

    admin: dispatcher/technician/client; dispatcher: technician only.
    The user cannot log in until the invitation is accepted.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR, INVALID_CUSTOMER
        - 401 Unauthorized: UNAUTHENTICATED, INVALID_TOKEN
        - 403 Forbidden: DENIED
        - 409 Conflict: EMAIL_ALREADY_EXISTS
        - 500 Internal Server Error: Server error
    """
    use_case = CreateUserUseCase(
        uow, engine, lifecycle, sender, store_timeout=config.STORE_TIMEOUT_SECONDS
    )
    result = await use_case.execute(
        identity,
        CreateUserCommand(
            fullname=request.fullname,
            email=request.email,
            role=request.role,
            phone_number=request.phone_number,
            customer_id=request.customer_id,
        ),
    )

    if result.is_err():
        raise_error(result.error)

    return result.value


@router.post(
    "/users/{user_id}/invitations",
    status_code=status.HTTP_201_CREATED,
    response_model=ResendInvitationResponse,
)
async def resend_invitation(
    user_id: UUID,
    identity: IdentityContext = Depends(get_identity_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    engine: AuthorizationEngine = Depends(get_authorization_engine),
    lifecycle: InvitationLifecycle = Depends(get_invitation_lifecycle),
    sender: IInvitationSender = Depends(get_invitation_sender),
    config=Depends(get_config),
):
    """
    Re-invite a user who has not set a password yet.

    Raises:
        - 401 Unauthorized: UNAUTHENTICATED, INVALID_TOKEN
        - 403 Forbidden: DENIED
        - 404 Not Found: NOT_FOUND
        - 409 Conflict: ALREADY_ACTIVATED
        - 500 Internal Server Error: Server error
    """
    use_case = ResendInvitationUseCase(
        uow, engine, lifecycle, sender, store_timeout=config.STORE_TIMEOUT_SECONDS
    )
    result = await use_case.execute(identity, user_id)

    if result.is_err():
        raise_error(result.error)

    return result.value


class SetActiveRequest(BaseModel):
    is_active: bool


@router.patch(
    "/users/{user_id}/active",
    status_code=status.HTTP_200_OK,
    response_model=SetUserActiveResponse,
)
async def set_user_active(
    user_id: UUID,
    request: SetActiveRequest,
    identity: IdentityContext = Depends(get_identity_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    engine: AuthorizationEngine = Depends(get_authorization_engine),
    config=Depends(get_config),
):
    """
    Enable or disable a user's login.

    Raises:
        - 401 Unauthorized: UNAUTHENTICATED, INVALID_TOKEN
        - 403 Forbidden: DENIED
        - 404 Not Found: NOT_FOUND
        - 500 Internal Server Error: Server error
    """
    use_case = SetUserActiveUseCase(
        uow, engine, store_timeout=config.STORE_TIMEOUT_SECONDS
    )
    result = await use_case.execute(identity, user_id, request.is_active)

    if result.is_err():
        raise_error(result.error)

    return result.value
