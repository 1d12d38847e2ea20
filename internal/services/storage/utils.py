"""
Storage service utility functions

This module provides the key helpers shared by every backend: path
normalization, path + file name joining, segment-aware prefix matching
and client-side page slicing.
"""

from pathlib import PurePosixPath
from typing import TYPE_CHECKING, List, Optional, Sequence, TypeVar, Union

from .exceptions import StorageValidationError

if TYPE_CHECKING:
    from .models import Page

T = TypeVar("T")

# Separator used in object keys by all supported backends
KEY_SEPARATOR = "/"

PathLike = Union[str, PurePosixPath]


def toPath(value: Optional[PathLike]) -> Optional[PurePosixPath]:
    """
    Normalize a user-supplied path into a relative PurePosixPath.

    Empty strings, "." and "/" mean "no path" and give None. Leading
    separators are dropped so keys never start with "/". Segments such as
    ".." are kept verbatim.

    Args:
        value: Path as string or PurePosixPath, or None

    Returns:
        Normalized relative path, or None if the value denotes the bucket root

    Examples:
        >>> toPath("folder/abc/")
        PurePosixPath('folder/abc')
        >>> toPath("") is None
        True
    """
    if value is None:
        return None

    pathStr = str(value).strip().lstrip(KEY_SEPARATOR)
    if not pathStr:
        return None

    path = PurePosixPath(pathStr)
    if str(path) == ".":
        return None
    return path


def joinKey(path: Optional[PathLike], fileName: Optional[str]) -> str:
    """
    Build the backend object key from a path and a file name.

    Both parts are normalized like toPath(): leading and repeated separators
    are dropped, so "/x.txt" and "x.txt" address the same object.

    Args:
        path: Optional parent path
        fileName: Optional file name

    Returns:
        fileName if path is absent, the path itself if fileName is absent,
        otherwise "path/fileName"

    Raises:
        StorageValidationError: If both path and fileName are absent

    Examples:
        >>> joinKey("folder/abc", "file.txt")
        'folder/abc/file.txt'
        >>> joinKey(None, "file.txt")
        'file.txt'
        >>> joinKey(None, "/docs//file.txt")
        'docs/file.txt'
    """
    normalizedPath = toPath(path)
    normalizedName = toPath(fileName)
    if normalizedPath is None:
        if normalizedName is None:
            raise StorageValidationError("Either path or file name must be specified")
        return str(normalizedName)

    if normalizedName is None:
        return str(normalizedPath)

    return f"{normalizedPath}{KEY_SEPARATOR}{normalizedName}"


def containsExtension(fileName: str) -> bool:
    """Check that file name has a non-empty extension after the last dot"""
    if "." not in fileName:
        return False
    return fileName.rsplit(".", 1)[1] != ""


def matchesPath(key: str, path: Optional[PathLike]) -> bool:
    """
    Check whether an object key belongs to the given path.

    Matching is aware of segment boundaries: "a/b" matches "a/b" and
    "a/b/c.txt" but not "a/bc.txt". A missing path matches everything.

    Args:
        key: Full object key
        path: Folder path to match against

    Returns:
        True if the key is the path itself or lies under it
    """
    normalizedPath = toPath(path)
    if normalizedPath is None:
        return True

    prefix = str(normalizedPath)
    return key == prefix or key.startswith(prefix + KEY_SEPARATOR)


def isFolderMarker(key: str) -> bool:
    """Check whether a key is a zero-byte folder placeholder such as "a/b/" created by web consoles"""
    return key.endswith(KEY_SEPARATOR)


def listingPrefix(path: Optional[PathLike]) -> str:
    """Prefix to send to backend list calls for the given path"""
    normalizedPath = toPath(path)
    return "" if normalizedPath is None else str(normalizedPath)


def paginate(items: Sequence[T], page: "Page") -> List[T]:
    """
    Slice a full listing to the requested page window.

    The window is [offset, offset + pageSize) clipped to the number of
    items. An offset past the end gives an empty list.

    Args:
        items: Full listing in backend order
        page: Page descriptor

    Returns:
        Items of the requested page
    """
    return list(items[page.offset : page.offset + page.pageSize])
