"""
Error codes for the storage-sdk.

This module defines standardized error codes used throughout the storage-sdk.
Error codes follow the format: Storage-{Component}-{HTTP_Code}-{Unique_ID}

Components:
- Client: Client construction and credential errors
- Common: Common utility errors (URL and connection string parsing)
"""

from enum import Enum
from typing import Dict, List, Optional


class ErrorComponent(Enum):
    """Components that can generate errors in the system."""

    CLIENT = "Client"
    COMMON = "Common"


class ErrorCode:
    """Error code with component, HTTP code, and description."""

    def __init__(
        self, component: str, http_code: str, unique_id: str, description: str
    ):
        self.code = f"Storage-{component}-{http_code}-{unique_id}"
        self.description = description

    def __str__(self) -> str:
        return f"{self.code}: {self.description}"


# Client Errors
CLIENT_ERRORS = {
    "MISSING_PARAMETER_ERROR": ErrorCode(
        "Client", "400", "00", "Required credential parameter is missing"
    ),
    "UNSUPPORTED_AUTH_MODE_ERROR": ErrorCode(
        "Client", "400", "01", "Authentication mode is not supported"
    ),
    "CAPABILITY_ERROR": ErrorCode(
        "Client", "400", "02", "Storage handle does not support the requested view"
    ),
    "CONTAINER_NOT_BOUND_ERROR": ErrorCode(
        "Client", "400", "03", "No container name given or bound to the handle"
    ),
}

# Common Utility Errors
COMMON_ERRORS = {
    "INVALID_URL_ERROR": ErrorCode("Common", "400", "00", "Invalid SAS URL"),
    "CONNECTION_STRING_PARSE_ERROR": ErrorCode(
        "Common", "400", "01", "Connection string parse error"
    ),
}

# Combined dictionary of all error codes
ERROR_CODES: Dict[str, ErrorCode] = {
    **CLIENT_ERRORS,
    **COMMON_ERRORS,
}


class StorageSdkError(Exception):
    """Base exception for the storage-sdk.

    The message is prefixed with the error code so that callers and log
    readers can identify the failure without inspecting the type.
    """

    def __init__(self, error_code: ErrorCode, message: Optional[str] = None):
        self.error_code = error_code
        super().__init__(f"{error_code}: {message}" if message else str(error_code))


class ClientError(StorageSdkError):
    """Errors raised while resolving credentials or building a client."""

    MISSING_PARAMETER_ERROR = CLIENT_ERRORS["MISSING_PARAMETER_ERROR"]
    UNSUPPORTED_AUTH_MODE_ERROR = CLIENT_ERRORS["UNSUPPORTED_AUTH_MODE_ERROR"]
    CAPABILITY_ERROR = CLIENT_ERRORS["CAPABILITY_ERROR"]
    CONTAINER_NOT_BOUND_ERROR = CLIENT_ERRORS["CONTAINER_NOT_BOUND_ERROR"]


class MissingParameterError(ClientError):
    """One or more required credential parameters were absent or empty."""

    def __init__(self, parameters: List[str]):
        self.parameters = list(parameters)
        super().__init__(
            ClientError.MISSING_PARAMETER_ERROR,
            f"Missing required parameters: {', '.join(self.parameters)}",
        )


class CommonError(StorageSdkError):
    """Errors raised by the parsing utilities."""

    INVALID_URL_ERROR = COMMON_ERRORS["INVALID_URL_ERROR"]
    CONNECTION_STRING_PARSE_ERROR = COMMON_ERRORS["CONNECTION_STRING_PARSE_ERROR"]


class InvalidUrlError(CommonError):
    """A SAS URL could not be decomposed into account, container and query."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(CommonError.INVALID_URL_ERROR, reason)


class InvalidConnectionStringError(CommonError):
    """A connection string did not match the known key/value shape."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(CommonError.CONNECTION_STRING_PARSE_ERROR, reason)
