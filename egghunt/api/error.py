from typing import NoReturn

from fastapi import status
from egghunt.libs.result import Error

# Result error codes that are the caller's fault, by HTTP status
CLIENT_ERROR_STATUS = {
    "INVALID_SESSION_ID": status.HTTP_400_BAD_REQUEST,
    "INVALID_ARGUMENT": status.HTTP_400_BAD_REQUEST,
    "INVALID_TERMINATION": status.HTTP_400_BAD_REQUEST,
    "SESSION_INVALID": status.HTTP_401_UNAUTHORIZED,
    "SESSION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def raise_for_error(error: Error) -> NoReturn:
    """Raise ClientError for known codes, ServerError for anything else"""
    status_code = CLIENT_ERROR_STATUS.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
