"""
Interface of the object store used by folderstore.

The store has no notion of folders. It only knows flat keys like "a/b/x.txt",
and can list one level below a prefix, grouping deeper keys into child prefixes.
"""

from typing import Protocol

from typing_extensions import TypedDict


class StoreListing(TypedDict):
    #: full keys of the objects directly below the prefix, e.g. "a/x.txt"
    objects: set[str]
    #: full paths of the child prefixes, without trailing delimiter, e.g. "a/b"
    prefixes: set[str]
    #: "directory" placeholder objects whose key is the listed prefix itself, e.g. "a/"
    placeholders: set[str]
    #: child prefixes with an empty name, without trailing delimiter, e.g. "a/" for keys like "a//x.txt"
    unnamed_prefixes: set[str]


def empty_listing() -> StoreListing:
    return StoreListing(objects=set(), prefixes=set(), placeholders=set(), unnamed_prefixes=set())


class ObjectStore(Protocol):
    async def put(self, key: str, data: bytes, content_type: str | None = None) -> None:
        """Store data under key, overwriting any existing object. Raises StoreWriteError."""
        ...

    async def delete(self, key: str) -> None:
        """Delete the object at key. Raises StoreDeleteError (with not_found=True if it did not exist)."""
        ...

    async def get_download_url(self, key: str, hours_valid: int) -> str:
        """Get a URL to download the object. Raises StoreReadError (with not_found=True if it does not exist)."""
        ...

    async def list_one_level(self, prefix: str) -> StoreListing:
        """
        List the objects and child prefixes directly below prefix. Keys that do not have a name of their
        own at this level are listed separately in placeholders and unnamed_prefixes. Raises StoreListError.
        """
        ...
