from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_error
from src.app.services.invitation_lifecycle import InvitationLifecycle
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.invitations import (
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
)
from src.depends import (
    get_config,
    get_invitation_lifecycle,
    get_password_hasher,
    get_unit_of_work,
)

router = APIRouter(prefix="/invitations", tags=["Invitations"])


class AcceptInvitationRequest(BaseModel):
    """
    Accept invitation HTTP request payload
    """

    token: str = Field(..., description="Invitation token")
    password: str = Field(..., description="New password")


@router.post(
    "/accept",
    status_code=status.HTTP_200_OK,
    response_model=AcceptInvitationResponse,
)
async def accept_invitation(
    request: AcceptInvitationRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
    lifecycle: InvitationLifecycle = Depends(get_invitation_lifecycle),
    config=Depends(get_config),
):
    """
    Accept Invitation

    Consumes a one-time invitation token and sets the user's password.

    Raises:
        - 400 Bad Request: INVALID_OR_EXPIRED_TOKEN, WEAK_PASSWORD
        - 500 Internal Server Error: Server error
    """
    use_case = AcceptInvitationUseCase(
        uow,
        hasher,
        lifecycle,
        min_password_length=config.PASSWORD_MIN_LENGTH,
        store_timeout=config.STORE_TIMEOUT_SECONDS,
    )
    result = await use_case.execute(request.token, request.password)

    if result.is_err():
        raise_error(result.error)

    return result.value
