"""
Tests for MemoryStorageBackend, dood!

The memory backend has no SDK underneath, so these tests also check the
storage contract itself: round trips, idempotent deletes and pagination.
"""

from pathlib import PurePosixPath

import pytest

from internal.services.storage.backends.memory import MemoryStorageBackend
from internal.services.storage.models import Page, StorageFile
from internal.services.storage.utils import joinKey


@pytest.fixture
def memoryBackend():
    """Create empty memory backend, dood!"""
    return MemoryStorageBackend()


def saveText(backend: MemoryStorageBackend, fileName: str, text: str, path=None) -> PurePosixPath:
    return backend.save(StorageFile(fileName, "text/plain", text.encode(), path=path))


class TestMemoryBackendBasics:
    """Test basic operations, dood!"""

    def testDefaultBucketName(self, memoryBackend):
        assert memoryBackend.bucket == "memory"

    def testSaveFindExistsDelete(self, memoryBackend):
        """Test save, find, exists and delete of root file"""
        savedPath = saveText(memoryBackend, "file1.txt", "hello")

        assert savedPath == PurePosixPath("file1.txt")
        file = memoryBackend.find("file1.txt")
        assert file is not None
        assert file.read() == b"hello"
        assert file.contentType == "text/plain"
        assert memoryBackend.exists("file1.txt") is True

        memoryBackend.delete("file1.txt")

        assert memoryBackend.exists("file1.txt") is False
        assert memoryBackend.find("file1.txt") is None

    def testRoundTripWithPath(self, memoryBackend):
        """Test that saved file comes back identical"""
        original = StorageFile("data.bin", "application/octet-stream", b"\x00\xff" * 10, path="a/b")
        memoryBackend.save(original)

        found = memoryBackend.find(original.fileName, original.path)

        assert found is not None
        assert found.fileName == original.fileName
        assert found.path == original.path
        assert found.contentType == original.contentType
        assert found.read() == b"\x00\xff" * 10

    def testFindWithPathEqualsFindWithJoinedKey(self, memoryBackend):
        """Test that two-argument find is find of joined key"""
        saveText(memoryBackend, "file.txt", "x", path="folder/abc")

        viaPath = memoryBackend.find("file.txt", "folder/abc")
        viaKey = memoryBackend.find(joinKey("folder/abc", "file.txt"))

        assert viaPath is not None and viaKey is not None
        assert viaPath.key == viaKey.key
        assert viaPath.read() == viaKey.read()

    def testSaveOverwrites(self, memoryBackend):
        """Test that saving to the same key replaces the object"""
        saveText(memoryBackend, "file.txt", "first")
        saveText(memoryBackend, "file.txt", "second")

        file = memoryBackend.find("file.txt")
        assert file is not None
        assert file.read() == b"second"
        assert len(memoryBackend.objects) == 1

    def testLeadingSlashAddressesSavedFile(self, memoryBackend):
        """Test that exists and delete normalize keys like save does"""
        saveText(memoryBackend, "/x.txt", "x")

        assert memoryBackend.exists("/x.txt") is True
        assert memoryBackend.exists("x.txt") is True

        memoryBackend.delete("/x.txt")

        assert memoryBackend.objects == {}

    def testDeleteMissingIsNoop(self, memoryBackend):
        """Test that deleting absent key is idempotent"""
        memoryBackend.delete("missing.txt")
        memoryBackend.delete("missing.txt", "folder")

        assert memoryBackend.exists("missing.txt") is False


class TestMemoryBackendFolders:
    """Test folder operations, dood!"""

    def testFindAllAndDeleteAll(self, memoryBackend):
        """Test two files under folder/abc"""
        saveText(memoryBackend, "a.txt", "A", path="folder/abc")
        saveText(memoryBackend, "b.txt", "B", path="folder/abc")

        files = memoryBackend.findAll(PurePosixPath("folder/abc"), Page(1, 10))
        assert [f.fileName for f in files] == ["a.txt", "b.txt"]

        memoryBackend.deleteAll(PurePosixPath("folder/abc"))

        assert memoryBackend.findAll(PurePosixPath("folder/abc"), Page(1, 10)) == []

    def testDeleteAllRespectsSegmentBoundaries(self, memoryBackend):
        """Test that deleting folder leaves folder2 alone"""
        saveText(memoryBackend, "x.txt", "1", path="folder")
        saveText(memoryBackend, "x.txt", "2", path="folder2")

        memoryBackend.deleteAll("folder")

        assert memoryBackend.exists("x.txt", "folder") is False
        assert memoryBackend.exists("x.txt", "folder2") is True

    def testFindAllIsRecursive(self, memoryBackend):
        """Test that nested folders are included"""
        saveText(memoryBackend, "a.txt", "A", path="root")
        saveText(memoryBackend, "b.txt", "B", path="root/nested/deeper")

        files = memoryBackend.findAll("root", Page(1, 10))

        assert [f.key for f in files] == ["root/a.txt", "root/nested/deeper/b.txt"]

    def testPagination(self, memoryBackend):
        """Test that pages split the listing in order"""
        for i in range(5):
            saveText(memoryBackend, f"{i}.txt", str(i), path="p")

        pages = [[f.fileName for f in memoryBackend.findAll("p", Page(n, 2))] for n in (1, 2, 3, 4)]

        assert pages == [["0.txt", "1.txt"], ["2.txt", "3.txt"], ["4.txt"], []]

    def testObjectsWithoutExtensionAreReturned(self, memoryBackend):
        """Test that keys stored without extension are found and listed"""
        memoryBackend.objects["folder/README"] = (b"readme", "text/plain")
        saveText(memoryBackend, "a.txt", "A", path="folder")

        file = memoryBackend.find("README", "folder")
        files = memoryBackend.findAll("folder", Page(1, 10))

        assert file is not None
        assert file.read() == b"readme"
        assert [f.fileName for f in files] == ["README", "a.txt"]

    def testDeleteAllEmptyFolder(self, memoryBackend):
        """Test that deleting empty folder is a no-op"""
        memoryBackend.deleteAll("nothing")

        assert memoryBackend.objects == {}
