"""Error taxonomy shared by the API handlers.

Every error the service returns on purpose is an ApiError subclass. The
exception handlers registered in main.py turn them into JSON responses
using error_body().
"""

from typing import Optional


class ApiError(Exception):
    """Base class for errors rendered as JSON error envelopes."""

    status_code: int = 500
    error_type: str = "TranscriptionError"
    code: str = "TRANSCRIPTION_FAILED"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class InputValidationError(ApiError):
    """Raised when the request is missing or carries malformed input."""

    status_code = 400
    error_type = "ValidationError"
    code = "MISSING_INPUT"


class TranscriptionError(ApiError):
    """Raised when a transcription could not be produced."""


class UpstreamError(TranscriptionError):
    """Raised when the Deepgram API call fails.

    upstream_status is the provider's HTTP status, or 0 when no response
    was received at all.
    """

    def __init__(self, message: str, upstream_status: int = 0):
        super().__init__(message)
        self.upstream_status = upstream_status


class AuthenticationError(ApiError):
    """Raised when a request lacks a valid session token."""

    status_code = 401
    error_type = "AuthenticationError"
    code = "INVALID_TOKEN"


class MetadataError(ApiError):
    """Raised when application metadata cannot be served."""

    code = "INTERNAL_SERVER_ERROR"


def error_body(error: ApiError) -> dict:
    """Build the JSON body for an ApiError."""
    if isinstance(error, MetadataError):
        return {"error": error.code, "message": error.message}

    body = {
        "type": error.error_type,
        "code": error.code,
        "message": error.message,
    }
    if not isinstance(error, AuthenticationError):
        body["details"] = {"originalError": error.message}
    return {"error": body}


def not_found_body(method: str, path: str) -> dict:
    """Build the JSON body for an unknown route."""
    return {
        "error": "NOT_FOUND",
        "message": f"Endpoint not found: {method} {path}",
    }
