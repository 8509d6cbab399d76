"""Uploading, deleting and linking to individual files in a folder."""

import logging

from folderstore.errors import DeleteFailed, StoreError, UploadFailed, UrlUnavailable
from folderstore.objectstorage.base import ObjectStore
from folderstore.paths import FolderPath, check_depth, format_path, join, object_key

PREVIEW_HOURS_VALID = 24
SHARE_HOURS_VALID = 168


async def upload(
    store: ObjectStore, path: FolderPath, name: str, data: bytes, content_type: str | None = None
) -> str:
    """
    Upload data as file name in folder path, overwriting an existing file, and return its key.
    Size and type limits are left to the store.
    """
    join(path, name)
    check_depth(path)
    key = object_key(path, name)
    try:
        await store.put(key, data, content_type=content_type)
    except StoreError as e:
        raise UploadFailed(format_path(path), name, e) from e
    logging.info(f"Uploaded {key} ({len(data)} bytes)")
    return key


async def delete_file(store: ObjectStore, path: FolderPath, name: str) -> None:
    join(path, name)
    key = object_key(path, name)
    try:
        await store.delete(key)
    except StoreError as e:
        raise DeleteFailed(format_path(path), name, e) from e
    logging.info(f"Deleted {key}")


async def preview_url(
    store: ObjectStore, path: FolderPath, name: str, hours_valid: int = PREVIEW_HOURS_VALID
) -> str:
    """Get a download link to open the file"""
    return await _download_url(store, path, name, hours_valid)


async def share_url(store: ObjectStore, path: FolderPath, name: str, hours_valid: int = SHARE_HOURS_VALID) -> str:
    """
    Get a download link to give to someone else. This is the same kind of link as the preview,
    it only stays valid longer. Getting it to the other person is up to the caller.
    """
    return await _download_url(store, path, name, hours_valid)


async def _download_url(store: ObjectStore, path: FolderPath, name: str, hours_valid: int) -> str:
    join(path, name)
    try:
        return await store.get_download_url(object_key(path, name), hours_valid=hours_valid)
    except StoreError as e:
        raise UrlUnavailable(format_path(path), name, e) from e
