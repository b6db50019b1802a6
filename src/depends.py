from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.jwt import SessionTokenSigner
from src.app.services.authorization import AuthorizationEngine
from src.app.services.invitation_lifecycle import InvitationLifecycle
from src.app.services.invitation_sender import IInvitationSender
from src.app.services.password_hasher import PasswordHasher
from src.domain.identity_context import IdentityContext
from src.libs.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# auto_error=False: a missing or non-Bearer header is reported as
# UNAUTHENTICATED (401) here rather than FastAPI's default response
security = HTTPBearer(auto_error=False)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


# Collaborators built once by create_app() and shared read-only


def get_config(request: Request):
    return request.app.state.config


def get_token_signer(request: Request) -> SessionTokenSigner:
    return request.app.state.token_signer


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_authorization_engine(request: Request) -> AuthorizationEngine:
    return request.app.state.authorization_engine


def get_invitation_lifecycle(request: Request) -> InvitationLifecycle:
    return request.app.state.invitation_lifecycle


def get_invitation_sender(request: Request) -> IInvitationSender:
    return request.app.state.invitation_sender


async def get_identity_context(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    signer: SessionTokenSigner = Depends(get_token_signer),
) -> IdentityContext:
    """
    Request identity resolver.

    Runs before every authenticated handler and produces the immutable
    IdentityContext that the handler passes explicitly to its use case.

    Raises:
        ClientError: 401 UNAUTHENTICATED if the Bearer header is missing or malformed,
                     401 INVALID_TOKEN if the token does not verify
    """
    if credentials is None:
        raise ClientError(
            Error("UNAUTHENTICATED", "Missing bearer token"),
            status_code=401,
        )

    result = signer.verify(credentials.credentials)
    if result.is_err():
        raise ClientError(result.error, status_code=401)

    return result.value
