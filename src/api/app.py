import logging
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from src.api.utils.jwt import SessionTokenSigner
from src.app.services.authorization import AuthorizationEngine
from src.app.services.invitation_lifecycle import InvitationLifecycle
from src.app.services.invitation_sender import IInvitationSender, InMemoryInvitationOutbox
from src.app.services.password_hasher import PasswordHasher
from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        f"{'.'.join(str(part) for part in err.get('loc', ())[1:]) or 'body'}: {err.get('msg')}"
        for err in exc.errors()
    ]
    error_dict = {"code": "VALIDATION_ERROR", "message": "; ".join(details)}
    logger.warning(f"Validation error: {error_dict}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"error": error_dict}
    )


def create_app(
    ApplicationConfig, invitation_sender: Optional[IInvitationSender] = None
) -> FastAPI:
    if not ApplicationConfig.JWT_SECRET:
        raise RuntimeError("JWT_SECRET is required")

    app = FastAPI(title="Field Service API", version="0.1.0")

    # Immutable for the life of the process; rotating the secret means a restart
    app.state.config = ApplicationConfig
    app.state.token_signer = SessionTokenSigner(
        ApplicationConfig.JWT_SECRET,
        ttl=timedelta(hours=ApplicationConfig.SESSION_TOKEN_TTL_HOURS),
    )
    app.state.password_hasher = PasswordHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)
    app.state.authorization_engine = AuthorizationEngine()
    app.state.invitation_lifecycle = InvitationLifecycle(
        ttl=timedelta(hours=ApplicationConfig.INVITATION_TTL_HOURS)
    )
    app.state.invitation_sender = invitation_sender or InMemoryInvitationOutbox()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import auth, invitation, reports, user, work_orders

    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(user.router, tags=["User"])
    app.include_router(invitation.router, tags=["Invitations"])
    app.include_router(work_orders.router, tags=["Work Orders"])
    app.include_router(reports.router, tags=["Reports"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    return app
