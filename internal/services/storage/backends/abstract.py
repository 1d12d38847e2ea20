"""
Abstract storage backend interface

This module defines the abstract base class that all storage backends must implement.
It provides a consistent interface for storage operations across different backend types.
"""

from abc import ABC, abstractmethod
from pathlib import PurePosixPath
from typing import List, Optional

from ..exceptions import StorageErrorKind
from ..models import Page, StorageFile
from ..utils import PathLike


class AbstractStorageBackend(ABC):
    """
    Abstract base class for storage backends.

    All storage backend implementations must inherit from this class and implement
    all abstract methods. This ensures a consistent interface across different
    storage types (Firebase, MinIO, S3, memory).

    Not-found conditions are part of the contract and never raised:
    find() returns None, exists() returns False, delete() does nothing.
    Any other SDK failure must be wrapped in StorageBackendError.

    Folder semantics are segment-aware everywhere: a path "a/b" covers the key
    "a/b" and every key starting with "a/b/", but not "a/bc.txt".
    """

    bucket: str

    @abstractmethod
    def find(self, fileName: str, path: Optional[PathLike] = None) -> Optional[StorageFile]:
        """
        Find a file by its name and optional path.

        Args:
            fileName: Name of the file (may itself contain path segments)
            path: Optional folder the file is stored in

        Returns:
            StorageFile with fully buffered content, or None if the object does not exist

        Raises:
            StorageValidationError: If both path and file name are missing
            StorageBackendError: If the retrieval fails (not for missing objects)
        """
        pass

    @abstractmethod
    def findAll(self, path: PathLike, page: Page) -> List[StorageFile]:
        """
        Find all files stored under a folder, one page at a time.

        Args:
            path: Folder to list (recursively)
            page: Page descriptor applied to the full listing

        Returns:
            Files of the requested page in listing order.
            Returns empty list if the page is past the end of the listing.

        Raises:
            StorageBackendError: If the list operation fails
        """
        pass

    @abstractmethod
    def exists(self, fileName: str, path: Optional[PathLike] = None) -> bool:
        """
        Check if a file exists.

        Args:
            fileName: Name of the file
            path: Optional folder the file is stored in

        Returns:
            True if the object exists, False otherwise (including probe failures)
        """
        pass

    @abstractmethod
    def save(self, file: StorageFile) -> PurePosixPath:
        """
        Save file to storage, overwriting any object with the same key.

        Args:
            file: File to save, its content stream is consumed

        Returns:
            Relative path of the stored object

        Raises:
            StorageBackendError: If the upload fails
        """
        pass

    @abstractmethod
    def delete(self, fileName: str, path: Optional[PathLike] = None) -> None:
        """
        Delete a file. Deleting a missing file is a no-op.

        Args:
            fileName: Name of the file
            path: Optional folder the file is stored in

        Raises:
            StorageBackendError: If the deletion fails (not for missing objects)
        """
        pass

    @abstractmethod
    def deleteAll(self, path: PathLike) -> None:
        """
        Delete every file stored under a folder. Empty folder is a no-op.

        Args:
            path: Folder to delete (recursively)

        Raises:
            StorageBackendError: If listing or any deletion fails
        """
        pass

    def _classifyError(self, error: Exception) -> StorageErrorKind:
        """
        Map an SDK-specific error to a normalized error kind.

        Backends override this to recognize their SDK's not-found signals.
        """
        return StorageErrorKind.BACKEND_FAILURE
