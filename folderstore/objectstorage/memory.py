"""
In-memory object store.

Keeps all objects in a dict in this process. Useful for the local browse shell when
no S3 server is configured, and as the store in the unit tests.
"""

import asyncio

from folderstore.errors import StoreDeleteError, StoreReadError
from folderstore.objectstorage.base import StoreListing, empty_listing
from folderstore.paths import DELIMITER


class MemoryObjectStore:
    def __init__(self, objects: dict[str, bytes] | None = None):
        self.objects: dict[str, bytes] = dict(objects or {})
        self.content_types: dict[str, str] = {}

    async def put(self, key: str, data: bytes, content_type: str | None = None) -> None:
        await asyncio.sleep(0)
        self.objects[key] = bytes(data)
        if content_type:
            self.content_types[key] = content_type
        else:
            self.content_types.pop(key, None)

    async def delete(self, key: str) -> None:
        await asyncio.sleep(0)
        if key not in self.objects:
            raise StoreDeleteError(key, "Object not found", not_found=True)
        del self.objects[key]
        self.content_types.pop(key, None)

    async def get_download_url(self, key: str, hours_valid: int) -> str:
        await asyncio.sleep(0)
        if key not in self.objects:
            raise StoreReadError(key, "Object not found", not_found=True)
        return f"memory://{key}"

    async def list_one_level(self, prefix: str) -> StoreListing:
        await asyncio.sleep(0)
        result = empty_listing()
        for key in self.objects:
            if not key.startswith(prefix):
                continue
            rest = key[len(prefix) :]
            child, sep, _ = rest.partition(DELIMITER)
            if not rest:
                result["placeholders"].add(key)
            elif not sep:
                result["objects"].add(key)
            elif child:
                result["prefixes"].add(prefix + child)
            else:
                result["unnamed_prefixes"].add(prefix)
        return result
