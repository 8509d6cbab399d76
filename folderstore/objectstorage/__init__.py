"""
Object store backends.

The namespace code only talks to an ObjectStore; which one is used is decided by the caller:
    - S3ObjectStore: any S3-compatible service (AWS S3, MinIO, SeaweedFS, ...)
    - MemoryObjectStore: a dict in this process, for the local browse shell and tests
"""

from folderstore.objectstorage.base import ObjectStore, StoreListing
from folderstore.objectstorage.memory import MemoryObjectStore
from folderstore.objectstorage.s3bucket import S3ObjectStore

__all__ = [
    "ObjectStore",
    "StoreListing",
    "MemoryObjectStore",
    "S3ObjectStore",
]
