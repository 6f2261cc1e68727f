"""
Core utilities package for the Daisy client.
Provides the error taxonomy shared by every module.
"""

from .exceptions import (
    DaisyException,
    AuthError,
    NotAuthenticatedError,
    ValidationError,
    NotFoundError,
    ParseError,
    UploadError,
    RecognitionError,
    RecognitionTimeoutError,
    RemoteServiceError,
)

__all__ = [
    "DaisyException",
    "AuthError",
    "NotAuthenticatedError",
    "ValidationError",
    "NotFoundError",
    "ParseError",
    "UploadError",
    "RecognitionError",
    "RecognitionTimeoutError",
    "RemoteServiceError",
]
