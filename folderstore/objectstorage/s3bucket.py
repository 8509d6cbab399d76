"""
Interact with S3-compatible object storage (e.g., AWS S3, MinIO, SeaweedFS, Cloudflare R2).
"""

import logging

import async_lru
from botocore.exceptions import BotoCoreError, ClientError
from types_aiobotocore_s3.client import S3Client

from folderstore.config import get_settings
from folderstore.connections import s3
from folderstore.errors import StoreDeleteError, StoreListError, StoreReadError, StoreWriteError
from folderstore.objectstorage.base import StoreListing, empty_listing
from folderstore.paths import DELIMITER

NOT_FOUND_CODES = ("404", "NoSuchKey", "NotFound")


async def get_bucket() -> str:
    """
    Get the configured bucket, taking into account whether we are using a test bucket.
    """
    settings = get_settings()
    if settings.use_test_bucket:
        return await _create_or_get_bucket_name(f"test-{settings.s3_bucket}")
    else:
        return await _create_or_get_bucket_name(settings.s3_bucket)


@async_lru.alru_cache(maxsize=100)
async def _create_or_get_bucket_name(bucket: str) -> str:
    try:
        await s3().head_bucket(Bucket=bucket)
    except ClientError as e:
        error = e.response.get("Error", {})
        if error.get("Code") in ("404", "NoSuchBucket"):
            logging.info(f"Creating bucket {bucket}")
            await s3().create_bucket(Bucket=bucket)
        else:
            raise
    return bucket


def _is_not_found(e: Exception) -> bool:
    if isinstance(e, ClientError):
        return e.response.get("Error", {}).get("Code") in NOT_FOUND_CODES
    return False


class S3ObjectStore:
    """
    ObjectStore on a single S3 bucket. Folders map onto the delimiter-based listing of S3.
    """

    def __init__(self, client: S3Client, bucket: str):
        self.client = client
        self.bucket = bucket

    async def put(self, key: str, data: bytes, content_type: str | None = None) -> None:
        params = dict(Bucket=self.bucket, Key=key, Body=data)
        if content_type:
            params["ContentType"] = content_type
        try:
            await self.client.put_object(**params)
        except (ClientError, BotoCoreError) as e:
            raise StoreWriteError(key, f"Could not write object: {e}") from e

    async def delete(self, key: str) -> None:
        # S3 does not complain about deleting missing keys, so check first to report them
        try:
            await self.client.head_object(Bucket=self.bucket, Key=key)
            await self.client.delete_object(Bucket=self.bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            if _is_not_found(e):
                raise StoreDeleteError(key, "Object not found", not_found=True) from e
            raise StoreDeleteError(key, f"Could not delete object: {e}") from e

    async def get_download_url(self, key: str, hours_valid: int) -> str:
        try:
            await self.client.head_object(Bucket=self.bucket, Key=key)
            return await self.client.generate_presigned_url(
                "get_object", Params={"Bucket": self.bucket, "Key": key}, ExpiresIn=hours_valid * 3600
            )
        except (ClientError, BotoCoreError) as e:
            if _is_not_found(e):
                raise StoreReadError(key, "Object not found", not_found=True) from e
            raise StoreReadError(key, f"Could not create download link: {e}") from e

    async def list_one_level(self, prefix: str) -> StoreListing:
        result = empty_listing()
        paginator = self.client.get_paginator("list_objects_v2")
        try:
            async for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix, Delimiter=DELIMITER):
                for content in page.get("Contents", []):
                    key = content.get("Key")
                    if not key:
                        continue
                    # some tools write a "directory" placeholder for the prefix itself
                    if key == prefix:
                        result["placeholders"].add(key)
                    else:
                        result["objects"].add(key)
                for common_prefix in page.get("CommonPrefixes", []):
                    child = common_prefix.get("Prefix", "")
                    if child.endswith(DELIMITER):
                        child = child[: -len(DELIMITER)]
                    if len(child) > len(prefix):
                        result["prefixes"].add(child)
                    else:
                        result["unnamed_prefixes"].add(child)
        except (ClientError, BotoCoreError) as e:
            raise StoreListError(prefix, f"Could not list objects: {e}") from e
        return result
