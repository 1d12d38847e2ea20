"""
Storage service: Singleton service for object storage operations

This module provides a singleton service that manages object storage operations
through pluggable backend implementations (Firebase, MinIO, S3, memory).
"""

import logging
import threading
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from .backends.abstract import AbstractStorageBackend
from .backends.firebase import FirebaseStorageBackend
from .backends.memory import MemoryStorageBackend
from .backends.minio import MinIOStorageBackend
from .backends.s3 import DEFAULT_REGION, S3StorageBackend
from .exceptions import StorageConfigError
from .models import Page, StorageFile
from .utils import PathLike, joinKey

if TYPE_CHECKING:
    from internal.config.manager import ConfigManager

logger = logging.getLogger(__name__)


def _requireParams(section: str, config: Dict[str, Any], requiredParams: List[str]) -> None:
    """Raise StorageConfigError listing every missing required parameter"""
    missingParams = [p for p in requiredParams if not config.get(p)]
    if missingParams:
        raise StorageConfigError(f"{section} configuration missing required parameters: {', '.join(missingParams)}")


class StorageService:
    """
    Singleton service for object storage operations.

    This service provides a unified interface for storing and retrieving files
    using different backend implementations. The backend is configured at initialization
    time through the injectConfig method; switching backend is a configuration change only.

    Supported backends:
    - memory: In-process dictionary, for tests and local development
    - firebase: Firebase Storage (Google Cloud Storage bucket)
    - minio: Self-hosted MinIO or another S3-compatible server
    - s3: AWS S3

    Usage:
        # Application setup: config first, then logging, then storage
        configManager = ConfigManager("config.toml")
        initLogging(configManager.getLoggingConfig())
        storage = StorageService.getInstance()
        storage.injectConfig(configManager)

        # Save and retrieve files
        key = storage.save(StorageFile("report.pdf", "application/pdf", data, path="docs"))
        file = storage.find("report.pdf", "docs")
        exists = storage.exists("report.pdf", "docs")
        storage.delete("report.pdf", "docs")

        # Work with folders
        files = storage.findAll("docs", Page(1, 20))
        storage.deleteAll("docs")

    Thread Safety:
        The singleton instance creation is thread-safe using RLock.
        Individual backend operations depend on backend implementation.
    """

    _instance: Union["StorageService", None] = None
    _lock = threading.RLock()

    def __new__(cls) -> "StorageService":
        """
        Create or return singleton instance with thread safety.

        Returns:
            The singleton StorageService instance
        """
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
            return cls._instance

    def __init__(self):
        """
        Initialize storage service.

        Only runs once due to singleton pattern. Sets up:
        - Backend placeholder (None until injectConfig is called)
        - Initialization flag
        """
        if not hasattr(self, "initialized"):
            self.backend: AbstractStorageBackend | None = None
            self.initialized = False
            logger.info("StorageService created, awaiting configuration, dood!")

    @classmethod
    def getInstance(cls) -> "StorageService":
        """
        Get singleton instance.

        Returns:
            The singleton StorageService instance
        """
        return cls()

    def injectConfig(self, configManager: "ConfigManager") -> None:
        """
        Initialize service with configuration from ConfigManager.

        Reads storage configuration and creates the appropriate backend based on
        the configured type. This method should be called once during application
        initialization.

        Args:
            configManager: The configuration manager containing storage settings

        Raises:
            StorageConfigError: If configuration is invalid or backend creation fails

        Configuration format:
            {
                "type": "s3",  # or "memory", "firebase", "minio"
                "firebase": {"bucket": "...", "credentials-file": "...", "project": "..."},
                "minio": {
                    "endpoint": "http://localhost:9000",
                    "key-id": "...",
                    "key-secret": "...",
                    "bucket": "my-bucket",
                    "region": "us-east-1"
                },
                "s3": {
                    "region": "us-east-1",
                    "key-id": "...",
                    "key-secret": "...",
                    "bucket": "my-bucket",
                    "endpoint": ""
                }
            }
        """
        try:
            config = configManager.getStorageConfig()

            if not config:
                raise StorageConfigError("Storage configuration is missing")

            storageType = config.get("type")
            if not storageType:
                raise StorageConfigError("Storage type is not specified in configuration")

            self.backend = self._createBackend(storageType, config)
            self.initialized = True
            logger.info(
                f"StorageService initialized with {storageType} backend, bucket: {self.backend.bucket}, dood!"
            )

        except StorageConfigError:
            raise
        except Exception as e:
            raise StorageConfigError(f"Failed to initialize storage service: {e}") from e

    def _createBackend(self, storageType: str, config: Dict[str, Any]) -> AbstractStorageBackend:
        """Create backend of given type from its configuration section"""
        if storageType == "memory":
            memoryConfig = config.get("memory") or {}
            return MemoryStorageBackend(bucket=memoryConfig.get("bucket", "memory"))

        sectionConfig = config.get(storageType)
        if storageType in ("firebase", "minio", "s3") and not sectionConfig:
            raise StorageConfigError(f"{storageType} storage configuration is missing")

        if storageType == "firebase":
            _requireParams("Firebase", sectionConfig, ["bucket"])
            return FirebaseStorageBackend(
                bucket=sectionConfig["bucket"],
                credentialsFile=sectionConfig.get("credentials-file") or None,
                project=sectionConfig.get("project") or None,
            )

        if storageType == "minio":
            _requireParams("MinIO", sectionConfig, ["endpoint", "key-id", "key-secret", "bucket"])
            return MinIOStorageBackend(
                endpoint=sectionConfig["endpoint"],
                keyId=sectionConfig["key-id"],
                keySecret=sectionConfig["key-secret"],
                bucket=sectionConfig["bucket"],
                region=sectionConfig.get("region") or DEFAULT_REGION,
            )

        if storageType == "s3":
            _requireParams("S3", sectionConfig, ["region", "bucket"])
            return S3StorageBackend(
                bucket=sectionConfig["bucket"],
                region=sectionConfig["region"],
                keyId=sectionConfig.get("key-id") or None,
                keySecret=sectionConfig.get("key-secret") or None,
                endpoint=sectionConfig.get("endpoint") or None,
            )

        raise StorageConfigError(f"Unknown storage type: {storageType}")

    def _ensureInitialized(self) -> AbstractStorageBackend:
        """
        Ensure the service is initialized before operations.

        Returns:
            The configured backend

        Raises:
            StorageConfigError: If service is not initialized
        """
        if not self.initialized or self.backend is None:
            raise StorageConfigError("StorageService is not initialized. Call injectConfig() first, dood!")
        return self.backend

    def find(self, fileName: str, path: Optional[PathLike] = None) -> Optional[StorageFile]:
        """
        Find a file by name and optional path.

        Returns:
            The file with buffered content, None if not found

        Raises:
            StorageConfigError: If service is not initialized
            StorageBackendError: If the retrieval operation fails
        """
        backend = self._ensureInitialized()
        file = backend.find(fileName, path)
        if file is not None:
            logger.debug(f"Found file: {file.key}, dood!")
        else:
            logger.warning(f"File not found: {joinKey(path, fileName)}, dood!")
        return file

    def findAll(self, path: PathLike, page: Page) -> List[StorageFile]:
        """
        Find one page of files stored under a folder.

        Raises:
            StorageConfigError: If service is not initialized
            StorageBackendError: If listing or retrieval fails
        """
        backend = self._ensureInitialized()
        files = backend.findAll(path, page)
        logger.debug(f"Found {len(files)} files in '{path}' on page {page.page} (size {page.pageSize}), dood!")
        return files

    def exists(self, fileName: str, path: Optional[PathLike] = None) -> bool:
        """
        Check if a file exists.

        Raises:
            StorageConfigError: If service is not initialized
        """
        backend = self._ensureInitialized()
        exists = backend.exists(fileName, path)
        logger.debug(f"Existence check for {joinKey(path, fileName)}: {exists}, dood!")
        return exists

    def save(self, file: StorageFile) -> PurePosixPath:
        """
        Save a file, overwriting any existing file with the same key.

        Returns:
            Relative path of the stored file

        Raises:
            StorageConfigError: If service is not initialized
            StorageBackendError: If the storage operation fails
        """
        backend = self._ensureInitialized()
        savedPath = backend.save(file)
        logger.debug(f"Saved file: {savedPath} ({file.contentType}), dood!")
        return savedPath

    def delete(self, fileName: str, path: Optional[PathLike] = None) -> None:
        """
        Delete a file, missing files are ignored.

        Raises:
            StorageConfigError: If service is not initialized
            StorageBackendError: If the deletion operation fails
        """
        backend = self._ensureInitialized()
        backend.delete(fileName, path)
        logger.debug(f"Deleted file: {joinKey(path, fileName)}, dood!")

    def deleteAll(self, path: PathLike) -> None:
        """
        Delete every file stored under a folder.

        Raises:
            StorageConfigError: If service is not initialized
            StorageBackendError: If listing or any deletion fails
        """
        backend = self._ensureInitialized()
        backend.deleteAll(path)
        logger.debug(f"Deleted folder: {path}, dood!")
