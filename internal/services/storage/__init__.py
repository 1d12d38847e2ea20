"""
Storage service package

This package provides a unified interface for storing and retrieving files
across multiple backend implementations (Firebase, MinIO, S3, memory).
"""

from .exceptions import (
    StorageBackendError,
    StorageConfigError,
    StorageError,
    StorageErrorKind,
    StorageValidationError,
)
from .models import Page, StorageFile
from .service import StorageService
from .utils import joinKey

__all__ = [
    "Page",
    "StorageBackendError",
    "StorageConfigError",
    "StorageError",
    "StorageErrorKind",
    "StorageFile",
    "StorageService",
    "StorageValidationError",
    "joinKey",
]
