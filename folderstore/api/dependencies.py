from fastapi import HTTPException, status

from folderstore.connections import s3, s3_enabled
from folderstore.objectstorage.base import ObjectStore
from folderstore.objectstorage.s3bucket import S3ObjectStore, get_bucket


async def get_store() -> ObjectStore:
    """The object store for a request. Tests override this dependency with an in-memory store."""
    if not s3_enabled():
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Object storage is not configured")
    return S3ObjectStore(s3(), await get_bucket())
