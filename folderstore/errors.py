"""
Exceptions raised by folderstore.

Validation errors also derive from ValueError, so the API can report them as bad requests.
They are always raised before anything is sent to the object store.
"""

from typing import Iterable


class FolderStoreError(Exception):
    pass


######################## VALIDATION #########################


class InvalidName(FolderStoreError, ValueError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid name {name!r}: please enter a non-empty name")


class InvalidSegment(FolderStoreError, ValueError):
    def __init__(self, segment: str, reason: str):
        self.segment = segment
        super().__init__(f"Invalid path segment {segment!r}: {reason}")


class DepthExceeded(FolderStoreError, ValueError):
    def __init__(self, path: str, max_depth: int):
        self.path = path
        self.max_depth = max_depth
        super().__init__(f"Cannot use /{path}: maximum {max_depth} nested folder levels allowed")


class NoParent(FolderStoreError, ValueError):
    def __init__(self):
        super().__init__("The root folder has no parent")


######################## STORE #########################


class StoreError(FolderStoreError):
    """An object store call failed. not_found is set if the store reported a missing object."""

    def __init__(self, key: str, message: str, not_found: bool = False):
        self.key = key
        self.not_found = not_found
        super().__init__(f"{message} ({key!r})")


class StoreWriteError(StoreError):
    pass


class StoreDeleteError(StoreError):
    pass


class StoreReadError(StoreError):
    pass


class StoreListError(StoreError):
    pass


######################## OPERATIONS #########################


class ListingFailed(FolderStoreError):
    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Error listing files in /{path}: {cause}")


class UploadFailed(FolderStoreError):
    def __init__(self, path: str, name: str, cause: Exception):
        self.path = path
        self.name = name
        self.cause = cause
        super().__init__(f"Error uploading file {name!r}: {cause}")


class DeleteFailed(FolderStoreError):
    def __init__(self, path: str, name: str, cause: Exception):
        self.path = path
        self.name = name
        self.cause = cause
        super().__init__(f"Error deleting file {name!r}: {cause}")

    @property
    def not_found(self) -> bool:
        return getattr(self.cause, "not_found", False)


class UrlUnavailable(FolderStoreError):
    def __init__(self, path: str, name: str, cause: Exception):
        self.path = path
        self.name = name
        self.cause = cause
        super().__init__(f"No download link available for {name!r}: {cause}")

    @property
    def not_found(self) -> bool:
        return getattr(self.cause, "not_found", False)


class SubtreeDeletePartialFailure(FolderStoreError):
    """
    Some objects under a folder could not be deleted.

    Objects that were deleted stay deleted; failed_keys lists exactly the keys (or, for
    subfolders that could not be listed, the prefixes) that are left behind.
    """

    def __init__(self, path: str, failed_keys: Iterable[str]):
        self.path = path
        self.failed_keys = sorted(failed_keys)
        super().__init__(f"Error deleting folder /{path}: could not delete {', '.join(self.failed_keys)}")
