from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_error
from src.api.utils.jwt import SessionTokenSigner
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import LoginResponse, LoginUseCase
from src.depends import get_config, get_password_hasher, get_token_signer, get_unit_of_work

router = APIRouter(prefix="/auth", tags=["Authentication"])


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    service_provider_id: UUID = Field(..., description="Service provider (tenant) ID")
    email: str = Field(..., min_length=1, max_length=255, description="User email address")
    password: str = Field(..., min_length=1, description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
    signer: SessionTokenSigner = Depends(get_token_signer),
    config=Depends(get_config),
):
    """
    User Login

    Authenticates a user inside one service provider and returns a 24h
    session token.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 401 Unauthorized: INVALID_CREDENTIALS (unknown user and wrong password alike)
        - 403 Forbidden: ACCOUNT_DISABLED
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(
        uow, hasher, signer, store_timeout=config.STORE_TIMEOUT_SECONDS
    )
    result = await use_case.execute(
        request.service_provider_id, request.email, request.password
    )

    if result.is_err():
        raise_error(result.error)

    return result.value
