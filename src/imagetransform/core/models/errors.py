"""Custom exception classes for the image transformation service."""

from typing import Any

from imagetransform.core.utils.constants import (
    ERROR_CODE_ACCESS_DENIED,
    ERROR_CODE_DECODE_FAILED,
    ERROR_CODE_ENCODE_FAILED,
    ERROR_CODE_INVALID_OPTIONS,
    ERROR_CODE_METADATA_OPERATION_FAILED,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_STORAGE,
    ERROR_CODE_TRANSFORMATION_FAILED,
    ERROR_CODE_UNAUTHORIZED,
    ERROR_CODE_VALIDATION_FAILED,
)


class ImageServiceError(Exception):
    """
    Base exception for all image service errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(ImageServiceError):
    """Raised when request validation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class InvalidOptionsError(ValidationError):
    """Raised when crop/resize geometry or other transformation options are malformed."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_INVALID_OPTIONS,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class NotFoundError(ImageServiceError):
    """Raised when a requested resource is absent or not owned by the requester."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_RESOURCE_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class UnauthorizedError(ImageServiceError):
    """Raised when a request carries no authenticated requester."""

    def __init__(
        self,
        *,
        message: str = "Authentication required",
        error_code: str = ERROR_CODE_UNAUTHORIZED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class AccessDeniedError(ImageServiceError):
    """Raised when a requester acts on a resource owned by another user."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_ACCESS_DENIED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class DecodeError(ImageServiceError):
    """Raised when source bytes are not a recognizable raster image."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_DECODE_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class EncodeError(ImageServiceError):
    """Raised when the target format cannot represent the pixel data."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_ENCODE_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class StorageFailureError(ImageServiceError):
    """Raised when the blob store is unreachable or rejects a read or write."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_STORAGE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class RepositoryFailureError(ImageServiceError):
    """Raised when the metadata store is unavailable or rejects an operation."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_METADATA_OPERATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class TransformationFailedError(ImageServiceError):
    """Raised when any step of the transformation pipeline fails.

    The failing step's error is kept on `cause` (and as `__cause__` when
    raised with ``from``) so callers can decide how much of it to surface.
    """

    cause: ImageServiceError

    def __init__(
        self,
        *,
        message: str,
        cause: ImageServiceError,
        error_code: str = ERROR_CODE_TRANSFORMATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.cause = cause
        super().__init__(message=message, error_code=error_code, details=details)

    @property
    def is_client_error(self) -> bool:
        """Whether the failure was caused by the request rather than the system."""
        return isinstance(self.cause, ValidationError)
