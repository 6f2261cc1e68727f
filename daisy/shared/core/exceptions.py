# 📄 File: daisy/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# This file defines all the special error types the Daisy client uses to say
# what went wrong (bad login, failed upload, broken recognition result) in a clear way.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy with error codes and structured details, raised at the
# backend-adapter seam when Supabase SDK errors are translated into domain errors.
# 🔗 Dependencies:
# typing
# 🔄 Connected Modules / Calls From:
# RemoteGateway, backend adapters, ExecutionPoller, ResultNormalizer, domain models

from typing import Any, Dict, Optional


class DaisyException(Exception):
    """
    Base exception class for the Daisy client.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# =============================================================================
# AUTHENTICATION EXCEPTIONS
# =============================================================================

class AuthError(DaisyException):
    """
    Exception raised for authentication failures.
    Used when credentials are invalid or the email is already registered.
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        email: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if email:
            details["email"] = email

        super().__init__(
            message=message,
            details=details,
            error_code="AUTH_ERROR"
        )


class NotAuthenticatedError(DaisyException):
    """
    Exception raised when an operation needs a session and there is none.
    """

    def __init__(
        self,
        message: str = "No active session",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details=details,
            error_code="NOT_AUTHENTICATED"
        )


# =============================================================================
# VALIDATION & DATA EXCEPTIONS
# =============================================================================

class ValidationError(DaisyException):
    """
    Exception raised for data validation failures.
    Used when a document model is malformed or rejected by the backend.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)

        super().__init__(
            message=message,
            details=details,
            error_code="VALIDATION_ERROR"
        )


class NotFoundError(DaisyException):
    """
    Exception raised when requested resource is not found.
    Used for unknown documents and stored files.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        super().__init__(
            message=message,
            details=details,
            error_code="NOT_FOUND"
        )


class ParseError(DaisyException):
    """
    Exception raised when a recognition payload cannot be parsed.
    The whole batch is rejected; ``field`` names the offending key.
    """

    def __init__(
        self,
        message: str = "Malformed recognition payload",
        field: Optional[str] = None,
        index: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if field:
            details["field"] = field
        if index is not None:
            details["index"] = index

        self.field = field
        self.index = index
        super().__init__(
            message=message,
            details=details,
            error_code="PARSE_ERROR"
        )


# =============================================================================
# STORAGE EXCEPTIONS
# =============================================================================

class UploadError(DaisyException):
    """
    Exception raised when an image cannot be uploaded.
    Covers unreadable sources and unresolvable filenames or mime types.
    """

    def __init__(
        self,
        message: str = "Upload failed",
        filename: Optional[str] = None,
        bucket_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if filename:
            details["filename"] = filename
        if bucket_id:
            details["bucket_id"] = bucket_id

        super().__init__(
            message=message,
            details=details,
            error_code="UPLOAD_ERROR"
        )


# =============================================================================
# REMOTE FUNCTION EXCEPTIONS
# =============================================================================

class RecognitionError(DaisyException):
    """
    Exception raised when the recognition function execution fails.
    Carries the error message reported by the backend.
    """

    def __init__(
        self,
        message: str = "Plant recognition failed",
        execution_id: Optional[str] = None,
        backend_message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if execution_id:
            details["execution_id"] = execution_id
        if backend_message:
            details["backend_message"] = backend_message

        self.execution_id = execution_id
        self.backend_message = backend_message
        super().__init__(
            message=message,
            details=details,
            error_code="RECOGNITION_ERROR"
        )


class RecognitionTimeoutError(RecognitionError):
    """Exception raised when an execution does not finish within the timeout."""

    def __init__(self, execution_id: str, timeout_seconds: float, last_status: Optional[str] = None):
        super().__init__(
            message=f"Execution {execution_id} did not finish within {timeout_seconds} seconds",
            execution_id=execution_id,
            details={
                "timeout_seconds": timeout_seconds,
                "last_status": last_status,
            }
        )
        self.error_code = "RECOGNITION_TIMEOUT"
        self.timeout_seconds = timeout_seconds


class RemoteServiceError(DaisyException):
    """
    Exception raised when a backend call fails for a reason outside the
    other categories (network errors, unexpected API responses).
    """

    def __init__(
        self,
        message: str = "Remote service error",
        service: Optional[str] = None,
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if service:
            details["service"] = service
        if operation:
            details["operation"] = operation

        super().__init__(
            message=message,
            details=details,
            error_code="REMOTE_SERVICE_ERROR"
        )
