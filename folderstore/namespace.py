"""
Listing the contents of a folder.

The snapshot is derived from the object store every time it is requested, and should
never be kept across navigation or mutations: the key space is the only source of truth.
"""

from pydantic import BaseModel, Field
from typing_extensions import Self

from folderstore.errors import ListingFailed, StoreError
from folderstore.objectstorage.base import ObjectStore
from folderstore.paths import SENTINEL_NAME, FolderPath, format_path, key_prefix, leaf_name


class NamespaceSnapshot(BaseModel):
    folders: set[str] = Field(default_factory=set, description="Names of the subfolders")
    files: set[str] = Field(default_factory=set, description="Names of the files")

    @classmethod
    def empty(cls) -> Self:
        return cls()

    @property
    def is_empty(self) -> bool:
        return not (self.folders or self.files)

    def sorted_folders(self) -> list[str]:
        return sorted(self.folders)

    def sorted_files(self) -> list[str]:
        return sorted(self.files)


async def list_namespace(store: ObjectStore, path: FolderPath) -> NamespaceSnapshot:
    """
    List the subfolders and files directly inside path. Folder sentinels are never included.
    Raises ListingFailed if the store could not be listed; this means the contents are unknown,
    not that the folder is empty.
    """
    try:
        listing = await store.list_one_level(key_prefix(path))
    except StoreError as e:
        raise ListingFailed(format_path(path), e) from e

    folders = {leaf_name(prefix) for prefix in listing["prefixes"]}
    files = {leaf_name(key) for key in listing["objects"]}
    folders.discard(SENTINEL_NAME)
    files.discard(SENTINEL_NAME)
    return NamespaceSnapshot(folders=folders, files=files)
