from fastapi import status

from tenancy.libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


ERROR_STATUS_CODES = {
    # Validation
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVALID_SLUG": status.HTTP_400_BAD_REQUEST,
    "INVALID_STEP_STATUS": status.HTTP_400_BAD_REQUEST,
    "INVALID_STEP_NUMBER": status.HTTP_400_BAD_REQUEST,
    "ARCHIVE_PARAMETERS_REQUIRED": status.HTTP_400_BAD_REQUEST,
    "VALIDATION_ERRORS_REQUIRED": status.HTTP_400_BAD_REQUEST,
    "SLUG_IMMUTABLE": status.HTTP_400_BAD_REQUEST,
    "LEAD_NOT_QUALIFIED": status.HTTP_422_UNPROCESSABLE_ENTITY,
    # Conflict
    "SLUG_CONFLICT": status.HTTP_409_CONFLICT,
    "INVALID_TRANSITION": status.HTTP_409_CONFLICT,
    "CONCURRENT_MODIFICATION": status.HTTP_409_CONFLICT,
    "WORKFLOW_COMPLETED": status.HTTP_409_CONFLICT,
    "WORKFLOW_FAILED": status.HTTP_409_CONFLICT,
    "WORKFLOW_PAUSED": status.HTTP_409_CONFLICT,
    "INVALID_WORKFLOW_STATE": status.HTTP_409_CONFLICT,
    "STEP_ORDER_VIOLATION": status.HTTP_409_CONFLICT,
    "LEAD_ALREADY_CONVERTED": status.HTTP_409_CONFLICT,
    "TENANT_ARCHIVED": status.HTTP_409_CONFLICT,
    "TENANT_INACTIVE": status.HTTP_409_CONFLICT,
    # Auth
    "NOT_AUTHENTICATED": status.HTTP_401_UNAUTHORIZED,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "INVALID_API_KEY": status.HTTP_401_UNAUTHORIZED,
    "INSUFFICIENT_PERMISSION": status.HTTP_403_FORBIDDEN,
    "TENANT_ACCESS_DENIED": status.HTTP_403_FORBIDDEN,
    # Not found
    "TENANT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "WORKFLOW_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "LEAD_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "ARCHIVE_JOB_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    # Transient
    "TRANSIENT_ERROR": status.HTTP_503_SERVICE_UNAVAILABLE,
    "SERVICE_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def to_http_error(error: Error) -> Exception:
    """ClientError for known business codes, ServerError for anything else"""
    status_code = ERROR_STATUS_CODES.get(error.code)
    if status_code is None:
        return ServerError(error)
    return ClientError(error, status_code=status_code)
