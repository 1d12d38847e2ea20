"""
Storage service exceptions

This module defines the exception hierarchy for the storage service.
All storage-related errors inherit from StorageError base class.
"""

from enum import StrEnum


class StorageErrorKind(StrEnum):
    """Normalized kind of a backend error, independent of the SDK that raised it"""

    NOT_FOUND = "not-found"
    BACKEND_FAILURE = "backend-failure"


class StorageError(Exception):
    """
    Base exception for all storage service errors.

    This is the parent class for all storage-related exceptions.
    Catch this to handle any storage service error generically.
    """

    pass


class StorageValidationError(StorageError, ValueError):
    """
    Exception raised when a file descriptor, page or key is invalid.

    This exception is raised synchronously at construction time when:
    - File name has no extension
    - Page number is not positive
    - Page size is negative
    - Both path and file name are missing

    Args:
        message: Description of why the value is invalid
    """

    pass


class StorageConfigError(StorageError):
    """
    Exception raised when storage configuration is invalid.

    This exception is raised during service initialization when:
    - Required configuration parameters are missing
    - Backend type is not recognized
    - Backend could not be constructed from the configuration
    - Service is used before it was configured

    Args:
        message: Description of the configuration error
    """

    pass


class StorageBackendError(StorageError):
    """
    Exception raised when a storage backend operation fails.

    Wraps SDK-specific errors (boto3, google-cloud-storage) so callers never
    have to import SDK exception types. Not-found conditions are normally
    recovered by the backends, so callers mostly see BACKEND_FAILURE here.

    Args:
        message: Description of the backend error
        kind: Normalized error kind
        originalError: The original exception that caused this error (optional)
    """

    def __init__(
        self,
        message: str,
        kind: StorageErrorKind = StorageErrorKind.BACKEND_FAILURE,
        originalError: Exception | None = None,
    ):
        """
        Initialize StorageBackendError with message, kind and optional original error.

        Args:
            message: Description of the backend error
            kind: Normalized error kind
            originalError: The original exception that caused this error
        """
        super().__init__(message)
        self.kind = kind
        self.originalError = originalError
