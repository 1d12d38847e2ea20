"""
In-memory storage backend implementation

This module provides a dictionary-based storage backend for testing and
local development. Nothing leaves the process and nothing survives it.
"""

from pathlib import PurePosixPath
from typing import Dict, List, Optional, Tuple

from ..models import Page, StorageFile
from ..utils import PathLike, joinKey, matchesPath, paginate
from .abstract import AbstractStorageBackend


class MemoryStorageBackend(AbstractStorageBackend):
    """
    Dictionary-backed storage backend.

    Objects are kept as (data, contentType) pairs keyed by object key.
    Listing order is insertion order; overwriting a key keeps its position.

    Use cases:
    - Unit testing code that depends on storage
    - Running the application without any cloud account

    Example:
        >>> backend = MemoryStorageBackend()
        >>> backend.save(StorageFile("a.txt", "text/plain", b"data", path="docs"))
        PurePosixPath('docs/a.txt')
        >>> backend.exists("a.txt", "docs")
        True
    """

    def __init__(self, bucket: str = "memory"):
        self.bucket = bucket
        self.objects: Dict[str, Tuple[bytes, str]] = {}

    def find(self, fileName: str, path: Optional[PathLike] = None) -> Optional[StorageFile]:
        key = joinKey(path, fileName)
        stored = self.objects.get(key)
        if stored is None:
            return None

        data, contentType = stored
        return StorageFile.fromKey(key, contentType, data)

    def _listKeys(self, path: PathLike) -> List[str]:
        return [key for key in self.objects if matchesPath(key, path)]

    def findAll(self, path: PathLike, page: Page) -> List[StorageFile]:
        files: List[StorageFile] = []
        for key in paginate(self._listKeys(path), page):
            file = self.find(key)
            if file is not None:
                files.append(file)
        return files

    def exists(self, fileName: str, path: Optional[PathLike] = None) -> bool:
        return joinKey(path, fileName) in self.objects

    def save(self, file: StorageFile) -> PurePosixPath:
        key = file.key
        self.objects[key] = (file.read(), file.contentType)
        return PurePosixPath(key)

    def delete(self, fileName: str, path: Optional[PathLike] = None) -> None:
        self.objects.pop(joinKey(path, fileName), None)

    def deleteAll(self, path: PathLike) -> None:
        for key in self._listKeys(path):
            del self.objects[key]
