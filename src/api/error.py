from typing import NoReturn

from fastapi import status
from src.libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


# Use case error codes that are the caller's fault. Anything else is a ServerError.
CLIENT_ERROR_STATUS = {
    "UNAUTHENTICATED": status.HTTP_401_UNAUTHORIZED,
    "INVALID_TOKEN": status.HTTP_401_UNAUTHORIZED,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "ACCOUNT_DISABLED": status.HTTP_403_FORBIDDEN,
    "DENIED": status.HTTP_403_FORBIDDEN,
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVALID_CUSTOMER": status.HTTP_400_BAD_REQUEST,
    "INVALID_OWNERSHIP_CHAIN": status.HTTP_400_BAD_REQUEST,
    "INVALID_ASSIGNEE": status.HTTP_400_BAD_REQUEST,
    "INVALID_OR_EXPIRED_TOKEN": status.HTTP_400_BAD_REQUEST,
    "WEAK_PASSWORD": status.HTTP_400_BAD_REQUEST,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "EMAIL_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "ALREADY_ACTIVATED": status.HTTP_409_CONFLICT,
}


def raise_error(error: Error) -> NoReturn:
    status_code = CLIENT_ERROR_STATUS.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
