"""
Custom exceptions for the Uploadcare SDK.

This module defines all the exception classes raised by the SDK. API
errors carry the HTTP status code they were mapped from.
"""


class UploadcareError(Exception):
    """Base exception for all Uploadcare SDK errors."""

    def __init__(self, message: str, error_code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self):
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class ConfigurationError(UploadcareError):
    """Raised when SDK configuration or credentials are invalid."""

    def __init__(self, message: str = "Invalid configuration", config_key: str = None, **kwargs):
        super().__init__(message, error_code="CONFIG_ERROR", **kwargs)
        self.config_key = config_key


class ValidationError(UploadcareError):
    """Raised when call arguments are rejected before any request is made."""

    def __init__(self, message: str = "Validation failed", field: str = None, **kwargs):
        super().__init__(message, error_code="VALIDATION_ERROR", **kwargs)
        self.field = field


class NetworkError(UploadcareError):
    """Raised when the HTTP transport fails."""

    def __init__(self, message: str = "Network operation failed", **kwargs):
        super().__init__(message, error_code="NETWORK_ERROR", **kwargs)


class RequestTimeoutError(UploadcareError):
    """Raised when a request times out."""

    def __init__(self, message: str = "Request timed out", timeout_seconds: float = None, **kwargs):
        super().__init__(message, error_code="TIMEOUT_ERROR", **kwargs)
        self.timeout_seconds = timeout_seconds


class ResponseParseError(UploadcareError):
    """Raised when a response body is not the JSON the API promised."""

    def __init__(self, message: str = "Failed to decode response", body: str = None, **kwargs):
        super().__init__(message, error_code="PARSE_ERROR", **kwargs)
        self.body = body


class ApiError(UploadcareError):
    """Base class for errors reported by the API itself."""

    code = "API_ERROR"

    def __init__(self, message: str = "API request failed", status_code: int = None, **kwargs):
        super().__init__(message, error_code=self.code, **kwargs)
        self.status_code = status_code


class BadRequestError(ApiError):
    """Raised on 400: endpoint parameters were rejected."""

    code = "BAD_REQUEST"


class AuthenticationError(ApiError):
    """Raised on 401: credentials or signature were not accepted."""

    code = "AUTH_ERROR"


class ForbiddenError(ApiError):
    """Raised on 403."""

    code = "FORBIDDEN"


class NotFoundError(ApiError):
    """Raised on 404."""

    code = "NOT_FOUND"


class NotAcceptableError(ApiError):
    """Raised on 406: the ``Accept`` version header is wrong for the endpoint."""

    code = "NOT_ACCEPTABLE"


class PayloadTooLargeError(ApiError):
    """Raised on 413."""

    code = "PAYLOAD_TOO_LARGE"


class RateLimitError(ApiError):
    """Raised on 429: the request was throttled."""

    code = "RATE_LIMIT"

    def __init__(self, message: str = "Too many requests", retry_after: int = None, **kwargs):
        if retry_after is not None:
            message = f"{message}, retry after {retry_after}"
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ClientError(ApiError):
    """Raised for any other 4xx response."""

    code = "CLIENT_ERROR"


class ServerError(ApiError):
    """Raised for 5xx responses."""

    code = "SERVER_ERROR"


STATUS_ERRORS = {
    400: BadRequestError,
    401: AuthenticationError,
    403: ForbiddenError,
    404: NotFoundError,
    406: NotAcceptableError,
    413: PayloadTooLargeError,
}
