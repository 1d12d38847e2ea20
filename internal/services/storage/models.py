"""
Storage value objects: file descriptor and page descriptor
"""

import io
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import BinaryIO, Optional, Union

from .exceptions import StorageValidationError
from .utils import PathLike, containsExtension, joinKey, toPath


class StorageFile:
    """
    File to be stored in or retrieved from a storage backend.

    The descriptor always keeps the last key segment as fileName and
    everything before it as path, so these two are equivalent:

        StorageFile("report.pdf", "application/pdf", data, path="docs/2024")
        StorageFile("docs/2024/report.pdf", "application/pdf", data)

    The content stream is single-pass: read it once (or call read()).

    Args:
        fileName: Name of the file, must end with an extension
        contentType: Content type (usually a MIME type)
        content: Binary stream or raw bytes with the file data
        path: Optional parent path

    Raises:
        StorageValidationError: If the resulting file name has no extension
    """

    def __init__(
        self,
        fileName: str,
        contentType: str,
        content: Union[BinaryIO, bytes, bytearray],
        path: Optional[PathLike] = None,
    ):
        self._setKey(joinKey(path, fileName))
        if not containsExtension(self.fileName):
            raise StorageValidationError(f"File name must contain extension: '{fileName}'")
        self._setContent(contentType, content)

    @classmethod
    def fromKey(
        cls, key: str, contentType: str, content: Union[BinaryIO, bytes, bytearray]
    ) -> "StorageFile":
        """
        Build descriptor of an object read back from a backend.

        Stored keys are taken as they are: objects written by other tools
        may have no extension, and they must still be returned by find().

        Args:
            key: Object key as listed by the backend
            contentType: Content type reported by the backend
            content: Object data

        Returns:
            StorageFile split into path and file name
        """
        file = cls.__new__(cls)
        file._setKey(key)
        file._setContent(contentType, content)
        return file

    def _setKey(self, key: str) -> None:
        fullPath = PurePosixPath(key)
        self.fileName: str = fullPath.name
        self.path: Optional[PurePosixPath] = toPath(fullPath.parent)

    def _setContent(self, contentType: str, content: Union[BinaryIO, bytes, bytearray]) -> None:
        self.contentType = contentType
        if isinstance(content, (bytes, bytearray)):
            content = io.BytesIO(bytes(content))
        self.content: BinaryIO = content

    @property
    def key(self) -> str:
        """Backend object key: path segments and file name joined with '/'"""
        return joinKey(self.path, self.fileName)

    def read(self) -> bytes:
        """Read the whole content stream"""
        return self.content.read()

    def __repr__(self) -> str:
        return f"StorageFile(key={self.key!r}, contentType={self.contentType!r})"


@dataclass(frozen=True)
class Page:
    """Pagination of listing results, pages are numbered from 1"""

    page: int
    pageSize: int

    def __post_init__(self):
        """Validate page number and size"""
        if self.page <= 0 or self.pageSize < 0:
            raise StorageValidationError(
                f"Page must be positive and page size non-negative, got page={self.page}, pageSize={self.pageSize}"
            )

    @property
    def offset(self) -> int:
        """Zero-based index of the first item on this page"""
        return (self.page - 1) * self.pageSize
