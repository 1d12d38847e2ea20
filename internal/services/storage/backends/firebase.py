"""
Firebase storage backend implementation

Firebase Storage buckets are Google Cloud Storage buckets, so this backend
talks to them through google-cloud-storage with the project's service account.
"""

import logging
from pathlib import PurePosixPath
from typing import Any, Dict, List, Optional

from google.api_core import exceptions as gcsExceptions
from google.cloud import storage

from ..exceptions import StorageBackendError, StorageErrorKind
from ..models import Page, StorageFile
from ..utils import PathLike, isFolderMarker, joinKey, listingPrefix, matchesPath, paginate
from .abstract import AbstractStorageBackend

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class FirebaseStorageBackend(AbstractStorageBackend):
    """
    Firebase (Google Cloud Storage) backend.

    Credentials are taken from a service account JSON file, from an already
    parsed service account dict, or from application default credentials if
    neither is given. The bucket is expected to exist: Firebase provisions it
    together with the project.

    Args:
        bucket: Bucket name (e.g., "my-project.appspot.com")
        credentialsFile: Path to service account JSON file (optional)
        credentialsInfo: Parsed service account JSON (optional)
        project: Google Cloud project id (optional, taken from credentials otherwise)

    Raises:
        StorageBackendError: If the client can't be created
    """

    def __init__(
        self,
        bucket: str,
        credentialsFile: Optional[str] = None,
        credentialsInfo: Optional[Dict[str, Any]] = None,
        project: Optional[str] = None,
    ):
        self.bucket = bucket

        clientParams: Dict[str, Any] = {}
        if project:
            clientParams["project"] = project

        try:
            if credentialsFile:
                self.client = storage.Client.from_service_account_json(credentialsFile, **clientParams)
            elif credentialsInfo:
                self.client = storage.Client.from_service_account_info(credentialsInfo, **clientParams)
            else:
                self.client = storage.Client(**clientParams)
            self.gcsBucket = self.client.bucket(bucket)
        except Exception as e:
            raise StorageBackendError(f"Failed to initialize Firebase storage client: {e}", originalError=e) from e

    def _classifyError(self, error: Exception) -> StorageErrorKind:
        if isinstance(error, gcsExceptions.NotFound):
            return StorageErrorKind.NOT_FOUND
        return StorageErrorKind.BACKEND_FAILURE

    def find(self, fileName: str, path: Optional[PathLike] = None) -> Optional[StorageFile]:
        """
        Download a blob with its metadata.

        get_blob() returns None for missing blobs; a NotFound raised by the
        download means the blob was removed right after the metadata request.
        """
        key = joinKey(path, fileName)

        try:
            blob = self.gcsBucket.get_blob(key)
            if blob is None:
                return None
            data = blob.download_as_bytes()
        except Exception as e:
            if self._classifyError(e) == StorageErrorKind.NOT_FOUND:
                return None
            raise StorageBackendError(f"Failed to get blob '{key}' from Firebase: {e}", originalError=e) from e

        return StorageFile.fromKey(key, blob.content_type or DEFAULT_CONTENT_TYPE, data)

    def _listKeys(self, path: PathLike) -> List[str]:
        prefix = listingPrefix(path)

        try:
            return [
                blob.name
                for blob in self.client.list_blobs(self.bucket, prefix=prefix)
                if matchesPath(blob.name, path)
            ]
        except Exception as e:
            raise StorageBackendError(
                f"Failed to list blobs with prefix '{prefix}' in Firebase: {e}", originalError=e
            ) from e

    def findAll(self, path: PathLike, page: Page) -> List[StorageFile]:
        files: List[StorageFile] = []
        fileKeys = [key for key in self._listKeys(path) if not isFolderMarker(key)]
        for key in paginate(fileKeys, page):
            file = self.find(key)
            if file is None:
                logger.warning(f"Blob '{key}' disappeared between listing and download, dood!")
                continue
            files.append(file)
        return files

    def exists(self, fileName: str, path: Optional[PathLike] = None) -> bool:
        key = joinKey(path, fileName)

        try:
            return bool(self.gcsBucket.blob(key).exists())
        except Exception as e:
            if self._classifyError(e) != StorageErrorKind.NOT_FOUND:
                logger.warning(f"Failed to check existence of blob '{key}' in Firebase: {e}")
            return False

    def save(self, file: StorageFile) -> PurePosixPath:
        key = file.key
        data = file.read()

        try:
            self.gcsBucket.blob(key).upload_from_string(data, content_type=file.contentType)
        except Exception as e:
            raise StorageBackendError(f"Failed to store blob '{key}' to Firebase: {e}", originalError=e) from e

        return PurePosixPath(key)

    def _deleteKey(self, key: str) -> None:
        try:
            self.gcsBucket.delete_blob(key)
        except Exception as e:
            if self._classifyError(e) == StorageErrorKind.NOT_FOUND:
                return
            raise StorageBackendError(f"Failed to delete blob '{key}' from Firebase: {e}", originalError=e) from e

    def delete(self, fileName: str, path: Optional[PathLike] = None) -> None:
        self._deleteKey(joinKey(path, fileName))

    def deleteAll(self, path: PathLike) -> None:
        for key in self._listKeys(path):
            self._deleteKey(key)
