"""
Creating and deleting folders.

Folders do not exist in the object store. A folder is created by writing its sentinel object,
and it only disappears when every key below its prefix is deleted, so deleting a folder means
walking and deleting the whole subtree.
"""

import asyncio
import contextlib
import logging
from typing import AsyncContextManager

from folderstore.errors import InvalidName, ListingFailed, StoreError, SubtreeDeletePartialFailure
from folderstore.objectstorage.base import ObjectStore, StoreListing
from folderstore.paths import SENTINEL_NAME, FolderPath, check_depth, format_path, join, key_prefix, object_key


async def create_folder(store: ObjectStore, parent_path: FolderPath, name: str) -> FolderPath:
    """
    Create the folder name inside parent_path and return its path.
    Creating a folder that already exists just writes its sentinel again.
    """
    name = name.strip()
    if not name:
        raise InvalidName(name)
    folder = check_depth(join(parent_path, name))
    await store.put(object_key(folder, SENTINEL_NAME), b"", content_type="application/octet-stream")
    logging.info(f"Created folder /{format_path(folder)}")
    return folder


async def delete_folder(
    store: ObjectStore, parent_path: FolderPath, name: str, max_concurrency: int | None = None
) -> FolderPath:
    """Delete the folder name inside parent_path with everything in it, and return its path"""
    folder = join(parent_path, name)
    await delete_subtree(store, folder, max_concurrency=max_concurrency)
    logging.info(f"Deleted folder /{format_path(folder)}")
    return folder


async def delete_subtree(store: ObjectStore, path: FolderPath, max_concurrency: int | None = None) -> None:
    """
    Delete every object below path, including the sentinels of path and all its subfolders.

    All objects and subfolders are deleted concurrently. If max_concurrency is given, at most that
    many store calls are in flight at the same time. A failure does not stop the other deletes;
    when everything is done, SubtreeDeletePartialFailure lists the keys that could not be deleted.
    Deleted objects are not restored.
    """
    limit: AsyncContextManager = asyncio.Semaphore(max_concurrency) if max_concurrency else contextlib.nullcontext()
    try:
        async with limit:
            listing = await store.list_one_level(key_prefix(path))
    except StoreError as e:
        raise ListingFailed(format_path(path), e) from e

    failed = await _delete_listing(store, listing, limit)
    if failed:
        raise SubtreeDeletePartialFailure(format_path(path), failed)


async def _delete_listing(store: ObjectStore, listing: StoreListing, limit: AsyncContextManager) -> list[str]:
    # placeholders and unnamed prefixes are not shown as files or folders, but still keep the folder alive
    objects = sorted(listing["objects"] | listing["placeholders"])
    prefixes = [f"{p}/" for p in sorted(listing["prefixes"] | listing["unnamed_prefixes"])]
    results = await asyncio.gather(
        *[_delete_object(store, key, limit) for key in objects],
        *[_delete_prefix(store, prefix, limit) for prefix in prefixes],
        return_exceptions=True,
    )
    # Store errors are already turned into failed keys, anything else is a real error
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return [key for failed_keys in results for key in failed_keys]  # type: ignore


async def _delete_prefix(store: ObjectStore, prefix: str, limit: AsyncContextManager) -> list[str]:
    try:
        async with limit:
            listing = await store.list_one_level(prefix)
    except StoreError as e:
        logging.warning(f"Could not list {prefix!r} for deletion: {e}")
        return [prefix]
    return await _delete_listing(store, listing, limit)


async def _delete_object(store: ObjectStore, key: str, limit: AsyncContextManager) -> list[str]:
    try:
        async with limit:
            await store.delete(key)
    except StoreError as e:
        if e.not_found:
            logging.debug(f"Object {key!r} was already deleted")
            return []
        logging.warning(f"Could not delete {key!r}: {e}")
        return [key]
    return []
